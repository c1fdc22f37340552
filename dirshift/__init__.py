"""dirshift - browse folders and batch-rename their children with a live preview."""

"""ptystore - filesystem-backed store for PTY terminal sessions."""

"""Create GitHub pull requests from the current branch."""

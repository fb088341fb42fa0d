"""Services for git-worktree-picker."""

"""npm-release: release hooks for npm packages and lerna workspaces."""

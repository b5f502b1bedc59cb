"""Services composing the lifecycle core with its collaborators."""

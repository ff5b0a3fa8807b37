"""Infrastructure layer: file system access and external result adaptation."""

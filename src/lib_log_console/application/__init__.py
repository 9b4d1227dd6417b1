"""Application layer: ports and use cases of the console logger."""

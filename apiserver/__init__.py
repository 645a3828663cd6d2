"""Lambda-style HTTP entrypoint for graph composition."""

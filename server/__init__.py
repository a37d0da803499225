"""HTTP server for the pipeline designer."""

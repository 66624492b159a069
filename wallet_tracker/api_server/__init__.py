"""
API server package: HTTP interface over the history pipeline.
"""

"""Graph file loading.

Graph files are YAML documents validated against the packaged JSON schema
``mstviz/schemas/graph.json``.
"""

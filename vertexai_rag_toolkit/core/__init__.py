"""
Vertex AI RAG toolkit core: configuration, state model and reconciliation
"""

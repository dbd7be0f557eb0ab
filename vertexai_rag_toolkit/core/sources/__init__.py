"""
Resource-specific SDK implementations
"""

from .rag_corpus_sdk import RagCorpusSDK

__all__ = ['RagCorpusSDK']

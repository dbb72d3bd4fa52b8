"""Compile architecture graphs into Serverless Framework projects"""

__version__ = "0.3.0"

"""CSV text ingestion."""

from profilesync.ingest.parser import parse_csv
from profilesync.ingest.tokenizer import tokenize_line

__all__ = ["parse_csv", "tokenize_line"]

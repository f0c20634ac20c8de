"""
Search indexing and query engine package.

- analyzers: tokenizer and filters producing (word, position) pairs
- inverted_index: word -> document -> positions mapping with ordered words
- query: keyword, range and proximity queries plus the index dump
"""

"""Extractor backends and the dispatch pipeline."""

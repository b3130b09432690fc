"""Shared, pipeline-independent building blocks: errors, lexicon, typed config."""

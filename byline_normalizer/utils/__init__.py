"""Core text utilities: normalization, classifiers and the byline pipeline."""

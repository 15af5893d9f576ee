"""
Inverted index job file.
Maps each word to the inputs it appears in.

Usage: localmr run docs/*.txt --job-file examples/inverted_index.py
"""

import string


def map_function(input_id, content):
    """
    Emit (word, input_id) once per distinct word in the input.

    Yields:
        (word, input_id) tuples
    """
    words = content.translate(str.maketrans('', '', string.punctuation)).lower().split()

    for word in sorted(set(words)):
        yield (word, input_id)


def reduce_function(key, values):
    """Comma-separated, sorted list of the inputs containing the word."""
    return ','.join(sorted(set(values)))

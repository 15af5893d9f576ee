"""
Word count job: the default task functions used by the client.
"""


def map_function(input_id, content):
    """
    Emit (word, "1") for each whitespace-separated word.

    Args:
        input_id: Input identifier (unused)
        content: Input text

    Returns:
        List of (word, "1") tuples
    """
    return [(word, "1") for word in content.split()]


def reduce_function(key, values):
    """Count the values collected for a word."""
    return str(len(values))

"""gemma: send a prompt plus an input document to Gemini and get JSON back.

The public entry point is the ``gemma`` console script (see :mod:`gemma.cli`).
Library callers usually want :func:`gemma.pipeline.run`.
"""

__version__ = "0.1.0"

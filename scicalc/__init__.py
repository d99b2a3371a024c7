"""scicalc: scientific calculator core.

Evaluates typed expressions such as ``2×sin(π/2)+sqrt(9)`` with a closed
tokenizer and recursive-descent parser, keeps a bounded history of
results, and converts between units.

Usage:
    python -m scicalc eval "2+3*4"                 # Evaluate one expression
    python -m scicalc repl                         # Interactive prompt
    python -m scicalc history                      # Show stored results
    python -m scicalc clear-history                # Forget stored results
    python -m scicalc convert 1 m ft               # Unit conversion
    python -m scicalc units                        # List known units
"""

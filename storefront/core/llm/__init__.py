"""Chat-completion integration layer.

This package is intentionally small:
- No prompt/completion logging (customer messages may contain personal data).
- Authenticates with ambient credentials only; no API keys in configuration.
- Treated as a stateless function by callers.
"""

"""Vehicle marketplace core package.

This package intentionally avoids importing submodules at package-import
time so that the console entry point and the web app only pay for what they
use. Import submodules explicitly (for example
``from marketplace.search import build_view``) when you need them.
"""

__all__ = ["client", "console", "feed", "logger", "meta", "models", "normalize", "search"]

"""A small terminal text editor with incremental search and Rust syntax highlighting."""

__version__ = "0.1.0"
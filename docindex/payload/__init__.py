"""Payload — reading the data files emitted by the documentation generator.

- Records: structured view of pre-rendered implementor fragments
- Loader: implementors and sidebar scripts to contributions
"""

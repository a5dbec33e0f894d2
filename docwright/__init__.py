"""docwright.

AI-assisted documentation tooling for git repositories: staged-change
review, changesets, README and reference page generation, and a
VitePress sidebar generator.
"""

__version__ = "0.1.0"

"""
gitpack - install software straight from a repository's manifest.

Fetches <owner>/<repo>@<ref> as an archive, finds its `.gitpack.yaml` and
runs the `add` or `rm` actions it declares.
"""

__version__ = "0.1.0"

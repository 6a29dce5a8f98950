# -----------------------------------------------------------------------------
# CORE LAYER
# -----------------------------------------------------------------------------
# The business logic of gitpack:
# - PlaceholderExpander: {{prefix}} / {{sudo.user}} substitution
# - Action / ActionList: Script and file-removal steps
# - Package: A loaded manifest
# - locate_manifest: Manifest search inside a repository
# - Tool: The add/rm orchestrator
# -----------------------------------------------------------------------------

from .actions import Action, ActionList, RemoveAction, ScriptAction
from .manifest import locate_manifest
from .package import ManifestError, Package
from .placeholders import PlaceholderExpander
from .tool import Tool

__all__ = [
    "Action", "ActionList", "RemoveAction", "ScriptAction",
    "locate_manifest",
    "ManifestError", "Package",
    "PlaceholderExpander",
    "Tool",
]

# -----------------------------------------------------------------------------
# DOMAIN LAYER
# -----------------------------------------------------------------------------
# Contains the Pydantic models for what the user asks for (RefSpec, Command)
# and what a repository declares about itself (ManifestDocument).
# -----------------------------------------------------------------------------

from .models import Command, InvalidRefSpecError, ManifestDocument, RefSpec

__all__ = ["Command", "InvalidRefSpecError", "ManifestDocument", "RefSpec"]

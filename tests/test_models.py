"""
Tests for Pydantic domain models.
"""

import pytest
from pydantic import ValidationError

from gitpack.domain.models import Command, InvalidRefSpecError, ManifestDocument, RefSpec


class TestRefSpec:
    """Tests for parsing <owner>/<repo>[@<ref>] targets."""

    def test_owner_and_repo_default_to_main(self):
        """A target without @ref fetches main."""
        refspec = RefSpec.parse("owner/repo")
        assert refspec.owner == "owner"
        assert refspec.name == "repo"
        assert refspec.ref == "main"

    def test_explicit_ref(self):
        """The part after @ is the ref."""
        refspec = RefSpec.parse("owner/repo@dev")
        assert (refspec.owner, refspec.name, refspec.ref) == ("owner", "repo", "dev")

    def test_ref_may_contain_slashes(self):
        """Branch names like feature/x are allowed."""
        refspec = RefSpec.parse("owner/repo@feature/x")
        assert refspec.ref == "feature/x"
        assert refspec.archive_stem == "repo-feature-x"

    @pytest.mark.parametrize(
        "text",
        ["invalid", "", "/repo", "owner/", "owner/repo@", "a/b/c", "@x/y", "owner/repo@ ", "owner/ ", " /repo"],
    )
    def test_malformed_targets_rejected(self, text):
        """Anything but owner/repo[@ref] is a usage error."""
        with pytest.raises(InvalidRefSpecError):
            RefSpec.parse(text)

    def test_invalid_refspec_is_value_error(self):
        """InvalidRefSpecError can be handled as a ValueError."""
        with pytest.raises(ValueError):
            RefSpec.parse("nope")

    def test_empty_owner_rejected_by_model(self):
        """The model itself refuses empty owner or name."""
        with pytest.raises(ValidationError):
            RefSpec(owner="", name="repo")

    def test_str(self):
        """String form always includes the ref."""
        assert str(RefSpec.parse("owner/repo")) == "owner/repo@main"


class TestCommand:
    """Tests for the Command enum."""

    def test_values(self):
        assert Command("add") is Command.ADD
        assert Command("rm") is Command.RM

    def test_unknown_command(self):
        with pytest.raises(ValueError):
            Command("install")


class TestManifestDocument:
    """Tests for the lenient manifest model."""

    def test_missing_keys_default(self):
        """An empty section is valid."""
        doc = ManifestDocument.model_validate({})
        assert doc.name == ""
        assert doc.category == ""
        assert doc.files == []
        assert doc.add == []
        assert doc.rm == []

    def test_name_and_category_coerced_to_text(self):
        doc = ManifestDocument.model_validate({"name": 42, "category": None})
        assert doc.name == "42"
        assert doc.category == ""

    def test_scalar_files_become_list(self):
        doc = ManifestDocument.model_validate({"files": "{{prefix}}/bin/tool"})
        assert doc.files == ["{{prefix}}/bin/tool"]

    def test_file_list_kept_in_order(self):
        doc = ManifestDocument.model_validate({"files": ["b", "a", None]})
        assert doc.files == ["b", "a"]

    def test_scalar_section_becomes_list(self):
        """A lone `rm: remove_files` is one entry."""
        doc = ManifestDocument.model_validate({"rm": "remove_files", "add": {"sh": "make"}})
        assert doc.rm == ["remove_files"]
        assert doc.add == [{"sh": "make"}]

    def test_unknown_keys_ignored(self):
        doc = ManifestDocument.model_validate({"name": "x", "homepage": "https://example.com"})
        assert doc.name == "x"

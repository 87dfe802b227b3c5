"""
Tests for the declaration parser — plugin and theme declarations.
"""

import pytest

from bootstrapper.core.errors import MalformedDeclaration
from bootstrapper.core.models.extension import UpdatePolicy
from bootstrapper.core.services.declarations import (
    parse_declaration,
    parse_declarations,
    parse_theme,
)


class TestParseDeclaration:
    def test_plain_identity(self):
        decl = parse_declaration("vendor.name")
        assert decl.vendor == "vendor"
        assert decl.name == "name"
        assert decl.update_policy is UpdatePolicy.MANAGED
        assert decl.remote_source is None
        assert decl.branch is None

    def test_unmanaged_with_source_and_branch(self):
        decl = parse_declaration("!vendor.name@source:branch")
        assert decl.update_policy is UpdatePolicy.UNMANAGED
        assert decl.vendor == "vendor"
        assert decl.name == "name"
        assert decl.remote_source == "source"
        assert decl.branch == "branch"

    def test_source_without_branch(self):
        decl = parse_declaration("Acme.Blog@https://github.com/acme/blog.git")
        assert decl.remote_source == "https://github.com/acme/blog.git"
        assert decl.branch is None

    def test_https_source_with_branch(self):
        decl = parse_declaration("Acme.Blog@https://github.com/acme/blog.git:develop")
        assert decl.remote_source == "https://github.com/acme/blog.git"
        assert decl.branch == "develop"

    def test_ssh_source_keeps_its_colon(self):
        decl = parse_declaration("Acme.Blog@git@github.com:acme/blog.git")
        assert decl.remote_source == "git@github.com:acme/blog.git"
        assert decl.branch is None

    def test_ssh_source_with_branch(self):
        decl = parse_declaration("Acme.Blog@git@github.com:acme/blog.git:v2")
        assert decl.remote_source == "git@github.com:acme/blog.git"
        assert decl.branch == "v2"

    @pytest.mark.parametrize(
        "raw",
        [
            "acme./..@https://git.example.com/x.git",
            "evil/x.keep",
            "acme.blog/../..",
            "acme.blog\\evil",
            "Acme.Blog.Extra",
            "acme.-rf",
        ],
    )
    def test_path_segments_are_rejected(self, raw):
        with pytest.raises(MalformedDeclaration, match="letters, digits and underscores"):
            parse_declaration(raw)

    def test_underscores_and_digits_allowed(self):
        decl = parse_declaration("Acme_2.Blog_v3")
        assert decl.directory == "plugins/acme_2/blog_v3"

    def test_surrounding_whitespace_is_ignored(self):
        decl = parse_declaration("  ! Acme.Blog  ")
        assert decl.identity == "Acme.Blog"
        assert decl.update_policy is UpdatePolicy.UNMANAGED

    def test_identity_is_case_sensitive(self):
        assert parse_declaration("Acme.Blog").identity != parse_declaration("acme.blog").identity

    def test_directory_is_lowercase(self):
        assert parse_declaration("Acme.Blog").directory == "plugins/acme/blog"

    def test_raw_is_kept(self):
        assert parse_declaration("!Acme.Blog").raw == "!Acme.Blog"

    @pytest.mark.parametrize(
        "raw",
        ["vendorname", "", "!", ".name", "vendor.", "!.", "ven dor.name", "vendor.name@", "@source"],
    )
    def test_malformed(self, raw):
        with pytest.raises(MalformedDeclaration):
            parse_declaration(raw)

    def test_malformed_is_value_error(self):
        with pytest.raises(ValueError, match="vendorname"):
            parse_declaration("vendorname")


class TestParseDeclarations:
    def test_order_and_duplicates_are_kept(self):
        decls = parse_declarations(["a.one", "!a.two", "a.one"])
        assert [d.identity for d in decls] == ["a.one", "a.two", "a.one"]

    def test_first_malformed_raises(self):
        with pytest.raises(MalformedDeclaration):
            parse_declarations(["a.one", "broken", "a.two"])


class TestParseTheme:
    def test_name_only(self):
        theme = parse_theme("demo")
        assert theme.name == "demo"
        assert theme.remote_source is None
        assert theme.directory == "themes/demo"

    def test_remote_with_branch(self):
        theme = parse_theme("site@https://gitlab.com/acme/site-theme.git:main")
        assert theme.name == "site"
        assert theme.remote_source == "https://gitlab.com/acme/site-theme.git"
        assert theme.branch == "main"

    @pytest.mark.parametrize("raw", ["", "  ", "my theme", "site@", "..", "../plugins", "a/b"])
    def test_malformed(self, raw):
        with pytest.raises(MalformedDeclaration):
            parse_theme(raw)

"""
Tests for URL and query-parameter resolution.
"""

import pytest

from repo_concat.domain.exceptions import InvalidInputError
from repo_concat.domain.value_objects import DisplayMode, RepositoryRequest
from repo_concat.services.reference_resolver import resolve


def _resolve(url, **params):
    return resolve(RepositoryRequest(url=url, **params))


@pytest.mark.parametrize(
    "url",
    ["", "   ", "github.com", "github.com/owner", "https://github.com/owner/"],
)
def test_missing_owner_or_repo_is_invalid(url):
    with pytest.raises(InvalidInputError):
        _resolve(url)


def test_url_without_host_is_invalid():
    with pytest.raises(InvalidInputError):
        _resolve("http:///owner/repo")


def test_plain_repository_url_defaults_to_main():
    resolved = _resolve("https://github.com/psf/requests")

    assert resolved.reference.owner == "psf"
    assert resolved.reference.repo == "requests"
    assert resolved.reference.branch == "main"
    assert resolved.scope.directories == ()
    assert resolved.scope.file is None
    assert resolved.scope.extensions == frozenset()
    assert resolved.mode is DisplayMode.FULL


def test_scheme_is_optional():
    resolved = _resolve("github.com/psf/requests")
    assert resolved.reference.full_name == "psf/requests"


def test_tree_url_sets_branch_and_directory():
    resolved = _resolve("https://github.com/owner/repo/tree/b/a/b/c")

    assert resolved.reference.branch == "b"
    assert resolved.scope.directories == ("a/b/c/",)
    assert resolved.scope.file is None


def test_tree_url_without_path_only_sets_branch():
    resolved = _resolve("github.com/owner/repo/tree/develop")

    assert resolved.reference.branch == "develop"
    assert resolved.scope.directories == ()


def test_blob_url_sets_branch_and_file():
    resolved = _resolve("https://github.com/owner/repo/blob/b/x/y.ts")

    assert resolved.reference.branch == "b"
    assert resolved.scope.file == "x/y.ts"
    assert resolved.scope.directories == ()


def test_query_file_wins_over_blob_target():
    resolved = _resolve("https://github.com/owner/repo/blob/b/x/y.ts", file="z.ts")
    assert resolved.scope.file == "z.ts"


def test_extra_segments_are_directory_shorthand():
    resolved = _resolve("github.com/owner/repo/src/utils")

    assert resolved.reference.branch == "main"
    assert resolved.scope.directories == ("src/utils/",)


def test_lone_tree_segment_is_treated_as_directory():
    resolved = _resolve("github.com/owner/repo/tree")
    assert resolved.scope.directories == ("tree/",)


def test_blob_without_file_is_treated_as_directory():
    resolved = _resolve("github.com/owner/repo/blob/main")

    assert resolved.reference.branch == "main"
    assert resolved.scope.directories == ("blob/main/",)
    assert resolved.scope.file is None


def test_query_branch_wins_over_path_branch():
    resolved = _resolve("github.com/owner/repo/tree/dev/src", branch="release")
    assert resolved.reference.branch == "release"


def test_query_dirs_are_split_trimmed_and_normalized():
    resolved = _resolve("github.com/owner/repo", dir=" src , /lib/, ,docs")
    assert resolved.scope.directories == ("src/", "lib/", "docs/")


def test_blank_query_dir_keeps_path_scope():
    resolved = _resolve("github.com/owner/repo/tree/main/src", dir=" , ")
    assert resolved.scope.directories == ("src/",)


def test_query_dir_is_anchored_to_path_directory():
    resolved = _resolve("github.com/owner/repo/tree/main/src", dir="components,src/lib")
    assert resolved.scope.directories == ("src/components/", "src/lib/")


def test_query_dir_unrelated_to_path_is_still_prefixed():
    resolved = _resolve("github.com/owner/repo/tree/main/packages/web", dir="docs")
    assert resolved.scope.directories == ("packages/web/docs/",)


def test_query_file_is_anchored_to_path_directory():
    resolved = _resolve("github.com/owner/repo/tree/main/src", file="app.tsx")
    assert resolved.scope.file == "src/app.tsx"


def test_query_file_already_under_path_directory_is_kept():
    resolved = _resolve("github.com/owner/repo/tree/main/src", file="/src/app.tsx")
    assert resolved.scope.file == "src/app.tsx"


def test_query_file_leading_slash_is_stripped():
    resolved = _resolve("github.com/owner/repo", file="/README.md")
    assert resolved.scope.file == "README.md"


def test_extensions_are_lowercased_and_deduplicated():
    resolved = _resolve("github.com/owner/repo", ext="TS, tsx,,.Md")
    assert resolved.scope.extensions == frozenset({"ts", "tsx", "md"})


@pytest.mark.parametrize(
    ("mode", "expected"),
    [("tree", DisplayMode.TREE), ("full", DisplayMode.FULL), (None, DisplayMode.FULL), ("TREE", DisplayMode.FULL)],
)
def test_mode_mapping(mode, expected):
    assert _resolve("github.com/owner/repo", mode=mode).mode is expected


def test_archive_root_replaces_slashes_in_branch():
    resolved = _resolve("github.com/owner/repo", branch="feature/x")
    assert resolved.reference.archive_root("feature/x") == "repo-feature-x/"
    assert resolved.reference.archive_root("main") == "repo-main/"

from collections.abc import Mapping
from typing import Any

import pytest

from upload_pipeline.uploads.aliases import AliasResolver
from upload_pipeline.uploads.exceptions import ConfigurationError
from upload_pipeline.uploads.models import DynamicPath, StaticPath
from upload_pipeline.uploads.paths import normalize_directory, resolve_directory


class TestAliasResolver:
    def test_resolves_root_alias(self) -> None:
        aliases = AliasResolver({"@images": "/srv/images"})

        assert aliases.resolve("@images/avatars") == "/srv/images/avatars"

    def test_resolves_bare_alias(self) -> None:
        aliases = AliasResolver({"@images": "/srv/images/"})

        assert aliases.resolve("@images") == "/srv/images"

    def test_name_without_at_sign_is_registered_with_it(self) -> None:
        aliases = AliasResolver({"uploads": "/data"})

        assert aliases.resolve("@uploads/x") == "/data/x"

    def test_alias_value_may_reference_another_alias(self) -> None:
        aliases = AliasResolver()
        aliases.set_alias("@files", "/srv/files")
        aliases.set_alias("@avatars", "@files/avatars")

        assert aliases.resolve("@avatars/1") == "/srv/files/avatars/1"

    def test_plain_paths_pass_through(self) -> None:
        assert AliasResolver().resolve("/var/www/uploads") == "/var/www/uploads"

    def test_unknown_alias_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="@missing"):
            AliasResolver().resolve("@missing/dir")

    def test_alias_name_with_slash_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="must not contain"):
            AliasResolver({"@a/b": "/x"})


class TestNormalizeDirectory:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("/srv/img", "/srv/img/"), ("/srv/img/", "/srv/img/"), ("/srv/img///", "/srv/img/"), ("/", "/")],
    )
    def test_single_trailing_slash(self, raw: str, expected: str) -> None:
        assert normalize_directory(raw) == expected


class TestResolveDirectory:
    def test_static_path_is_aliased_and_normalized(self) -> None:
        aliases = AliasResolver({"@images": "/srv/images"})

        result = resolve_directory(StaticPath("@images/big//"), {}, aliases)

        assert result == "/srv/images/big/"

    def test_dynamic_path_result_used_verbatim(self) -> None:
        path = DynamicPath(lambda attrs: f"/srv/images/{attrs['id']}")

        result = resolve_directory(path, {"id": 7}, AliasResolver())

        assert result == "/srv/images/7"

    def test_dynamic_path_is_not_alias_expanded(self) -> None:
        path = DynamicPath(lambda attrs: "@images/raw/")

        result = resolve_directory(path, {}, AliasResolver({"@images": "/srv"}))

        assert result == "@images/raw/"

    def test_dynamic_path_receives_read_only_attributes(self) -> None:
        seen: list[Mapping[str, Any]] = []

        def capture(attrs: Mapping[str, Any]) -> str:
            seen.append(attrs)
            return "/srv/"

        resolve_directory(DynamicPath(capture), {"id": 3}, AliasResolver())

        assert seen[0]["id"] == 3
        with pytest.raises(TypeError):
            seen[0]["id"] = 4  # type: ignore[index]

    def test_unsupported_expression_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="path"):
            resolve_directory("/srv", {}, AliasResolver())  # type: ignore[arg-type]

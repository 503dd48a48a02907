from collections.abc import Mapping

from upload_pipeline.uploads.exceptions import ConfigurationError


class AliasResolver:
    """Expands ``@alias/rest`` path expressions into concrete directories.

    Only the root segment (everything before the first ``/``) is an alias.
    Values registered through ``set_alias`` may themselves start with an
    alias and are expanded at registration time.
    """

    def __init__(self, aliases: Mapping[str, str] | None = None) -> None:
        self._aliases: dict[str, str] = {}
        for name, value in (aliases or {}).items():
            self.set_alias(name, value)

    def set_alias(self, name: str, value: str) -> None:
        if not name.startswith("@"):
            name = f"@{name}"
        if "/" in name:
            raise ConfigurationError(f"Alias name must not contain '/': {name}")
        self._aliases[name] = self.resolve(value).rstrip("/")

    def resolve(self, path: str) -> str:
        """Return ``path`` with its leading alias substituted.

        Raises:
            ConfigurationError: if ``path`` starts with an unregistered alias.
        """
        if not path.startswith("@"):
            return path
        root, sep, rest = path.partition("/")
        if root not in self._aliases:
            raise ConfigurationError(f"Invalid path alias: {root}")
        return f"{self._aliases[root]}{sep}{rest}"

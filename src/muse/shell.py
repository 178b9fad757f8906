"""Shell-style home directory expansion for configured paths."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Union

from muse.errors import EnvironmentLookupError

TILDE = "~"

PathLike = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True)
class Expansion:
    """Result of expanding a path.

    When `expanded` is False, `path` is the exact object that was passed
    in, so callers can keep their existing value untouched.
    """

    path: PathLike
    expanded: bool


class ShellExpander:
    """Expands a leading `~` using a home directory environment variable.

    Only a first path component of exactly `~` is replaced. `some/~/path`
    and `~user/path` are returned as given.
    """

    def __init__(self, home_dir_var: str = "HOME", environ: Optional[Mapping[str, str]] = None):
        """Initialize the expander.

        Args:
            home_dir_var: Name of the variable holding the home directory
            environ: Environment to read from. If None, uses os.environ at
                expansion time.
        """
        self.home_dir_var = home_dir_var
        self._environ = environ

    def tilde(self, path: PathLike) -> Expansion:
        """Expand a leading `~` component.

        Raises:
            EnvironmentLookupError: If the path starts with `~` and the home
                directory variable is not set
        """
        # Split the raw text: pathlib would drop a leading "." component
        first, _, rest = os.fspath(path).partition(os.sep)
        if first != TILDE:
            return Expansion(path=path, expanded=False)

        environ = os.environ if self._environ is None else self._environ
        try:
            home_dir = environ[self.home_dir_var]
        except KeyError:
            raise EnvironmentLookupError(self.home_dir_var) from None

        return Expansion(path=Path(home_dir) / rest.lstrip(os.sep), expanded=True)

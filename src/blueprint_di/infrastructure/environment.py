import os
from typing import Optional

from blueprint_di.domain import IEnvironment


class OsEnvironment(IEnvironment):
    """Reads variables from the process environment."""

    def get(self, name: str) -> Optional[str]:
        return os.environ.get(name)

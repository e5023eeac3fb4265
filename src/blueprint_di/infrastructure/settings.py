from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class CompilerSettings(BaseSettings):
    """Compiler configuration, read from ``BLUEPRINT_*`` environment variables.

    Attributes:
        default_dir: Directory class specifiers resolve against instead of each
            document's own directory.
        dependency_dir_name: Nested dependency folder searched in every ancestor.
        module_suffix: File suffix of implementation modules.
        include_process_paths: Whether bare module names also search ``sys.path``.
    """

    model_config = SettingsConfigDict(env_prefix="BLUEPRINT_", extra="ignore")

    default_dir: Optional[str] = None
    dependency_dir_name: str = "site-packages"
    module_suffix: str = ".py"
    include_process_paths: bool = True

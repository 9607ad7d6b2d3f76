from enum import Enum
from os import getcwd
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import Annotated

DEFAULT_COMMAND_TIMEOUT = 600


class _StrictModel(BaseModel):
    """
    Pydantic parser configuration options.
    """

    model_config = ConfigDict(
        extra="forbid",
    )


class UIAdapter(str, Enum):
    """
    Supported UI adapters.
    """

    CONSOLE = "console"
    VIRTUAL = "virtual"


class LogConfig(_StrictModel):
    """
    Configuration for logging.
    """

    level: str = Field(
        "WARNING",
        description="Logging level",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    format: str = Field(
        "%(asctime)s %(levelname)s [%(name)s] %(message)s",
        description="Logging format",
    )
    output: Optional[str] = Field(
        None,
        description="Output file for logs (if not specified, logs are printed to stderr)",
    )


class ProcessConfig(_StrictModel):
    """
    Configuration for running package manager commands.
    """

    timeout: float = Field(
        DEFAULT_COMMAND_TIMEOUT,
        description="Timeout (in seconds) for a single package manager command",
        gt=0.0,
    )


class ConsoleUIConfig(_StrictModel):
    """
    Configuration for the interactive console UI.
    """

    type: Literal[UIAdapter.CONSOLE] = UIAdapter.CONSOLE
    verbose: bool = Field(False, description="Stream package manager output live")
    quiet: bool = Field(False, description="Suppress most output")


class VirtualUIConfig(_StrictModel):
    """
    Configuration for the virtual (non-interactive) UI.
    """

    type: Literal[UIAdapter.VIRTUAL] = UIAdapter.VIRTUAL
    answers: dict[str, Any] = Field(
        default_factory=dict,
        description="Preset answers, keyed by question name",
    )
    verbose: bool = False
    quiet: bool = False


UIConfig = Annotated[
    Union[ConsoleUIConfig, VirtualUIConfig],
    Field(discriminator="type"),
]


class Config(_StrictModel):
    """
    Frameworks setup configuration
    """

    log: LogConfig = LogConfig()
    proc: ProcessConfig = ProcessConfig()
    ui: UIConfig = ConsoleUIConfig()
    workspace: Optional[str] = Field(
        None,
        description="Directory in which new projects are created (defaults to the current directory)",
    )

    @property
    def workspace_root(self) -> str:
        return self.workspace or getcwd()


class ConfigLoader:
    """
    Configuration loader takes care of loading and parsing configuration files.

    The default loader is already initialized as `setupkit.config.loader`. To
    load the configuration from a file, use `setupkit.config.loader.load(path)`.

    To get the current configuration, use `setupkit.config.get_config()`.
    """

    config: Config
    config_path: Optional[str]

    def __init__(self):
        self.config_path = None
        self.config = Config()

    @staticmethod
    def _remove_json_comments(json_str: str) -> str:
        """
        Remove comments from a JSON string.

        Removes all lines that start with "//" from the JSON string.

        :param json_str: JSON string with comments.
        :return: JSON string without comments.
        """
        return "\n".join([line for line in json_str.splitlines() if not line.strip().startswith("//")])

    @classmethod
    def from_json(cls: "ConfigLoader", config: str) -> Config:
        """
        Parse JSON Into a Config object.

        :param config: JSON string to parse.
        :return: Config object.
        """
        return Config.model_validate_json(cls._remove_json_comments(config), strict=True)

    def load(self, path: str) -> Config:
        """
        Load a configuration from a file.

        :param path: Path to the configuration file.
        :return: Config object.
        """
        with open(path, "rb") as f:
            raw_config = f.read()

        if b"\x00" in raw_config:
            encoding = "utf-16"
        else:
            encoding = "utf-8"

        text_config = raw_config.decode(encoding)
        self.config = self.from_json(text_config)
        self.config_path = path
        return self.config


loader = ConfigLoader()


def get_config() -> Config:
    """
    Return current configuration.

    :return: Current configuration object.
    """
    return loader.config


__all__ = ["loader", "get_config"]

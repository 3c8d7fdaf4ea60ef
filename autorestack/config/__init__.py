"""Config module."""

from typing import Dict, Any
from .models import RepoConfig, UserConfig, RestackConfig, ToolConfig

class Config(RestackConfig):
    """Validated autorestack settings.

    Takes the nested dict produced by `config_parser.parse_config`, with
    `repo`, `user` and `tool.autorestack` sections; missing keys get defaults.
    """
    def __init__(self, config: Dict[str, Dict[str, Any]]):
        tool_section = config.get('tool', {})
        super().__init__(
            repo=RepoConfig.model_validate(config.get('repo', {})),
            user=UserConfig.model_validate(config.get('user', {})),
            tool=ToolConfig.model_validate(tool_section.get('autorestack', {})),
        )

def default_config() -> Config:
    """Defaults only, for use before the repository has been inspected."""
    return Config({})

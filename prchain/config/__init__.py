"""Config module."""

from typing import Dict, Any
from .models import RepoConfig, UserConfig, PrchainConfig, ToolConfig

class Config(PrchainConfig):
    """Config object holding repository, user and tool config.

    Built from the nested dict produced by the config parser, where tool
    settings live under `tool.prchain`.
    """
    def __init__(self, config: Dict[str, Dict[str, Any]]):
        """Initialize with parsed config dict."""
        repo_config = config.get('repo', {})
        user_config = config.get('user', {})
        tool_section = config.get('tool', {})
        tool_config = tool_section.get('prchain', {})

        super().__init__(
            repo=RepoConfig.model_validate(repo_config),
            user=UserConfig.model_validate(user_config),
            tool=ToolConfig.model_validate(tool_config),
        )

def default_config() -> Config:
    """Get default config without reading any files."""
    return Config({
        'repo': {
            'trunk': 'main',
            'fetch': True,
        },
        'user': {},
        'tool': {
            'prchain': {
                'concurrency': 0
            }
        }
    })

"""Config parser logic."""

import os
from pathlib import Path
from typing import Dict, Optional, Any
import logging
import yaml

# Get module logger
logger = logging.getLogger(__name__)

RepoConfig = Dict[str, Any]  # Use Any since yaml can return various types
Config = Dict[str, RepoConfig]

REPO_CONFIG_FILE = '.prchain.yaml'

def _load_yaml(path: str) -> Optional[Dict[str, Any]]:
    """Load a YAML mapping, returning None if the file doesn't exist."""
    try:
        with open(path, 'r') as f:
            logger.debug(f"Found {path}, loading...")
            data = yaml.safe_load(f)
    except FileNotFoundError:
        return None
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return data

def parse_config(directory: Optional[str] = None) -> Config:
    """Parse config from the user config file and the repository config file.

    Args:
        directory: Repository root holding .prchain.yaml (default: cwd)

    Returns:
        Config: Nested dict with 'repo', 'user' and 'tool' sections
    """
    config: Config = {
        'repo': {
            'trunk': 'main',
            'fetch': True,
        },
        'user': {
            'color': True,
        },
        'tool': {
            'prchain': {
                'concurrency': 0,
            }
        }
    }

    user_config = _load_yaml(internal_config_file_path())
    if user_config and isinstance(user_config.get('user'), dict):
        logger.debug(f"Adding user config: {user_config['user']}")
        config['user'].update(user_config['user'])

    repo_path = os.path.join(directory or os.getcwd(), REPO_CONFIG_FILE)
    repo_config = _load_yaml(repo_path)
    if repo_config is None:
        logger.debug(f"No {REPO_CONFIG_FILE} found, using defaults")
    else:
        logger.debug(f"Config from {REPO_CONFIG_FILE}: {repo_config}")
        if isinstance(repo_config.get('repo'), dict):
            config['repo'].update(repo_config['repo'])
        if isinstance(repo_config.get('user'), dict):
            config['user'].update(repo_config['user'])
        tool_section = repo_config.get('tool')
        if isinstance(tool_section, dict) and isinstance(tool_section.get('prchain'), dict):
            config['tool']['prchain'].update(tool_section['prchain'])

    return config

def internal_config_file_path() -> str:
    """Get path to the per-user config file."""
    return str(Path.home() / ".prchain.yml")

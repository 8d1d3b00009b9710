# sysloggen/config.py
"""Configuration loader and validator."""

import copy
import os
from dataclasses import dataclass, field
from typing import Optional

import yaml

from .exceptions import ConfigurationError


@dataclass
class GeneratorConfig:
    delay_ms: int = 0


@dataclass
class OutputConfig:
    source_ip: Optional[str] = None
    source_ip_file: Optional[str] = None
    echo: bool = True


@dataclass
class InputConfig:
    message_file: Optional[str] = None
    host_file: Optional[str] = None


@dataclass
class AppConfig:
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    inputs: InputConfig = field(default_factory=InputConfig)

    def validate(self) -> None:
        """Reject settings that cannot be combined."""
        if self.output.source_ip and self.output.source_ip_file:
            raise ConfigurationError("-s and -S options cannot be used together.")
        delay_ms = self.generator.delay_ms
        if isinstance(delay_ms, bool) or not isinstance(delay_ms, int):
            raise ConfigurationError(f"delay_ms must be an integer, got {delay_ms!r}")
        if not isinstance(self.output.echo, bool):
            raise ConfigurationError(f"echo must be true or false, got {self.output.echo!r}")
        if delay_ms < 0:
            raise ConfigurationError(
                f"Delay must not be negative, got {self.generator.delay_ms} ms"
            )


DEFAULT_CONFIG = {
    'generator': {'delay_ms': 0},
    'output': {
        'source_ip': None,
        'source_ip_file': None,
        'echo': True,
    },
    'inputs': {
        'message_file': None,
        'host_file': None,
    },
}


def load_config(config_path: str = "config.yaml", required: bool = False) -> AppConfig:
    """Load configuration from YAML file, falling back to defaults.

    A missing file is only an error when ``required`` is set, i.e. the user
    named it explicitly.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    
    if required and not os.path.exists(config_path):
        raise ConfigurationError(f"Configuration file not found: {config_path}")
    
    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, 'r') as f:
                file_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e
        
        if not isinstance(file_config, dict):
            raise ConfigurationError(f"{config_path} must contain a mapping")
        
        # Merge configurations
        for key, value in file_config.items():
            if key not in config:
                raise ConfigurationError(f"Unknown configuration section '{key}' in {config_path}")
            if not isinstance(value, dict):
                raise ConfigurationError(f"Section '{key}' in {config_path} must be a mapping")
            config[key].update(value)
    
    try:
        return AppConfig(
            generator=GeneratorConfig(**config['generator']),
            output=OutputConfig(**config['output']),
            inputs=InputConfig(**config['inputs']),
        )
    except TypeError as e:
        raise ConfigurationError(f"Invalid configuration in {config_path}: {e}") from e

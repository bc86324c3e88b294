import os
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG: dict = {
    "main_branch": "master",
    "standard": "DCR",
    "standards_dir": None,  # None = built-in rulesets; set to a directory to discover custom ones
    "phpcs": "phpcs",
    "failure_limit": 0,  # 0 = review every file
    "show_codes": False,
    "mine": False,  # True = current git user, an email = that committer, False = everyone
    "exclude": [],  # fnmatch patterns or directory names to skip (e.g. "vendor/", "*.min.js")
    "reports": [],
    "mail": None,  # "subject|body|from"; any part may be blank
    "smtp_host": "localhost",
    "smtp_port": 25,
}

_ENV_OVERRIDES = {
    "DCR_PHPCS": "phpcs",
    "DCR_SMTP_HOST": "smtp_host",
    "DCR_SMTP_PORT": "smtp_port",
}


def load_config(config_path: str = ".dcr.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. Environment variables (DCR_PHPCS, DCR_SMTP_HOST, DCR_SMTP_PORT)
      3. .dcr.yml in the current directory
      4. CLI argument overrides
    """
    config = {
        **DEFAULT_CONFIG,
        "exclude": list(DEFAULT_CONFIG["exclude"]),
        "reports": list(DEFAULT_CONFIG["reports"]),
    }

    for env_var, key in _ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            config[key] = value

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    config["smtp_port"] = int(config["smtp_port"])
    config["failure_limit"] = int(config["failure_limit"] or 0)
    return config

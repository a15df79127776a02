import yaml
import os
import platform


def load_config():
    # Assuming this file is at 'repo/utils/config.py', we go up one level.
    repo_root = get_repo_root()

    # Platform-specific config mapping
    config_map = {
        'Darwin': 'config.mac.yaml',
        'Windows': 'config.windows.yaml'
    }

    system = platform.system()
    platform_config = config_map.get(system)

    # Use platform-specific config if it exists, otherwise fall back to config.yaml
    candidate_files = [platform_config, 'config.yaml'] if platform_config else ['config.yaml']

    for filename in candidate_files:
        config_path = os.path.join(repo_root, filename)
        if os.path.exists(config_path):
            with open(config_path, 'r') as file:
                try:
                    return yaml.safe_load(file) or {}
                except yaml.YAMLError as e:
                    raise Exception(f"Error parsing '{filename}': {e}")

    raise FileNotFoundError("No valid configuration file found (checked platform-specific and default).")


def get_repo_root() -> str:
    """Resolve the harness repo root from this file's location."""
    return os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

# ---------------------------------------------------------------------------
# Convenience accessors (with defaults)
# ---------------------------------------------------------------------------
def get_env_dir(config: dict = None) -> str:
    """Directory holding the dotenv files. Relative paths resolve from the repo root. Default: envs."""
    if config is None:
        config = load_config()
    env_dir = config.get("environment", {}).get("env_dir", "envs")
    if os.path.isabs(env_dir):
        return env_dir
    return os.path.join(get_repo_root(), env_dir)


def get_env_var_name(config: dict = None) -> str:
    """Name of the variable selecting the target environment. Default: ENV."""
    if config is None:
        config = load_config()
    return config.get("environment", {}).get("env_var", "ENV")


def get_exclude_domains(config: dict = None) -> list:
    """Domains whose responses are never inspected for correlation values. Default: []."""
    if config is None:
        config = load_config()
    return config.get("correlation", {}).get("exclude_domains", []) or []


def get_pbkdf2_iterations(config: dict = None) -> int:
    """PBKDF2 rounds used to derive the AES key. Default: 1000."""
    if config is None:
        config = load_config()
    return config.get("crypto", {}).get("pbkdf2_iterations", 1000)


def get_salt_bytes(config: dict = None) -> int:
    """Random salt length in bytes. Default: 16."""
    if config is None:
        config = load_config()
    return config.get("crypto", {}).get("salt_bytes", 16)


def get_secret_key_bytes(config: dict = None) -> int:
    """Length of generated secret keys in bytes. Default: 32."""
    if config is None:
        config = load_config()
    return config.get("crypto", {}).get("secret_key_bytes", 32)


def get_api_timeout(config: dict = None) -> float:
    """Outbound REST timeout in seconds. Default: 30."""
    if config is None:
        config = load_config()
    return config.get("api", {}).get("timeout_seconds", 30)


def get_storage_state_path(config: dict = None) -> str:
    """Where the authenticated browser session is saved. Relative paths resolve from the repo root. Default: .auth/login.json."""
    if config is None:
        config = load_config()
    path = config.get("auth", {}).get("storage_state_path", ".auth/login.json")
    if os.path.isabs(path):
        return path
    return os.path.join(get_repo_root(), path)


if __name__ == '__main__':
    # For testing purposes, print the configuration.
    config = load_config()
    print("Loaded general configuration:")
    print(config)

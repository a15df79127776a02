# Harness MCP Server
# Exposes the credential tooling (secret key generation, env file encryption) as MCP tools.
from fastmcp import FastMCP, Context  # ✅ FastMCP 2.x import

from services.secret_manager import generate_and_store_secret_key, encrypt_env_for
from utils.config import load_config
from utils.env import EnvironmentConfigError
from utils.logging_utils import setup_logging

config = load_config()
setup_logging(config.get("logging", {}).get("level", "INFO"))

mcp = FastMCP(
    name="harness",
)

# ----------------------------------------------------------
# Credential Tools
# ----------------------------------------------------------

@mcp.tool()
async def generate_secret_key(key_name: str, ctx: Context) -> dict:
    """
    Generates a random 256-bit secret key and stores it in envs/.env.
    Args:
        key_name (str): Variable name to store the key under (e.g. 'UAT_SECRET_KEY').
        ctx (Context, optional): FastMCP context for state/error details.

    Returns: dict with the key name and status. The key itself is never returned.
    """
    generate_and_store_secret_key(key_name)
    await ctx.info(f"{key_name} written to .env file")
    return {"key_name": key_name, "status": "stored"}

@mcp.tool()
async def encrypt_env_file(env_name: str, ctx: Context) -> dict:
    """
    Encrypts every value in envs/.env.<env_name> with the <ENV_NAME>_SECRET_KEY from envs/.env.
    Args:
        env_name (str): Environment name, e.g. 'uat'.
        ctx (Context, optional): FastMCP context for state/error details.

    Returns: dict with the number of encrypted variables, or the error.
    """
    try:
        count = encrypt_env_for(env_name)
    except (EnvironmentConfigError, OSError) as e:
        await ctx.error(str(e))
        return {"env_name": env_name, "status": "error", "error": str(e)}

    await ctx.info(f"Encrypted {count} variable(s) for {env_name}")
    return {"env_name": env_name, "status": "encrypted", "encrypted_count": count}

# -----------------------------
# Harness MCP entry point
# -----------------------------
if __name__ == "__main__":
    try:
        mcp.run("stdio")
    except KeyboardInterrupt:
        print("Shutting down Harness MCP…")

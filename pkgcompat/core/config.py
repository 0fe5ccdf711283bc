import os
from dotenv import load_dotenv
from pathlib import Path

# The .env file lives in the `pkgcompat` package directory
env_path = Path(__file__).resolve().parent.parent / '.env'
load_dotenv(dotenv_path=env_path)

# host overrides (empty means "detect from the running interpreter")
PKGCOMPAT_PLATFORM = os.getenv("PKGCOMPAT_PLATFORM")
PKGCOMPAT_ARCH = os.getenv("PKGCOMPAT_ARCH")
# e.g. "node=18.17.1,npm=9.6.7"
PKGCOMPAT_ENGINE_VERSIONS = os.getenv("PKGCOMPAT_ENGINE_VERSIONS", "")

# logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

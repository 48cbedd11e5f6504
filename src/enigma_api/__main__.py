"""Run the API server with `python -m enigma_api`.

ENIGMA_API_HOST and ENIGMA_API_PORT override the bind address.
"""
import os

import uvicorn


def main():
    host = os.environ.get("ENIGMA_API_HOST", "127.0.0.1")
    port = int(os.environ.get("ENIGMA_API_PORT", "8000"))
    uvicorn.run("enigma_api.api:app", host=host, port=port)


if __name__ == "__main__":
    main()

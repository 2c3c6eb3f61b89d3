import sys

import uvicorn

from travelflow.main import app  # noqa: F401

def run_http(port: int = 8000, reload: bool = False):
    """Run the HTTP server"""
    print(f"Starting Travelflow on port {port}...")
    uvicorn.run(
        "travelflow.main:app",
        host="0.0.0.0",
        port=port,
        reload=reload,
    )

if __name__ == "__main__":
    run_http(reload="--reload" in sys.argv)

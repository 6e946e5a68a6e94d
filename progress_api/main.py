"""
Notion Progress API entry point.

Run with `uvicorn progress_api.main:app` or `python -m progress_api.main`.
"""

from dotenv import load_dotenv

from progress_api.app import create_app

# Load environment variables from .env file
load_dotenv()

app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("progress_api.main:app", host="0.0.0.0", port=8000, reload=True)

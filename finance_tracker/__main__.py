"""
Run the API server.

    python -m finance_tracker
"""

import uvicorn

from finance_tracker.config import get_settings

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "finance_tracker.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )

import logging
import os

import uvicorn

if __name__ == "__main__":
    logging.basicConfig(
        level=os.environ.get("TAGNET_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print("Starting Tagnet Explorer API Server...")
    print("Docs available at: http://localhost:8000/docs")

    uvicorn.run(
        "tagnet.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )

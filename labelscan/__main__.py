import os

import uvicorn

from labelscan.app import create_app


def main() -> None:
    port = int(os.getenv("PORT", "3001"))
    uvicorn.run(create_app(), host=os.getenv("HOST", "0.0.0.0"), port=port)


if __name__ == "__main__":
    main()

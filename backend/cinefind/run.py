import os
import uvicorn


def main() -> None:
    port = int(os.getenv("PORT", "3000"))
    uvicorn.run("cinefind.main:app", host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()

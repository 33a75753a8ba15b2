import argparse
import os
import uvicorn


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the inventory service")
    parser.add_argument("--host", required=True, help="Server listen host")
    parser.add_argument("-p", "--port", type=int, required=True, help="Server listen port")
    parser.add_argument("-c", "--cache", required=True, help="Path to cache directory")
    parser.add_argument("--backend", choices=["json", "sql"], default=None, help="Item store backend")
    parser.add_argument("--reload", action="store_true")

    args = parser.parse_args()

    os.environ["HOST"] = args.host
    os.environ["PORT"] = str(args.port)
    os.environ["CACHE_DIR"] = args.cache
    if args.backend:
        os.environ["STORAGE_BACKEND"] = args.backend

    uvicorn.run("inventory.main:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()

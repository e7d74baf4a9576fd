import os
import sys

from consultancy_api.client import ApiClient
from consultancy_api.config import API_BASE_URL
from consultancy_api.documents import extract_text
from consultancy_api.errors import ValidationError


def index_file(path: str, client: ApiClient) -> bool:
    filename = os.path.basename(path)
    with open(path, "rb") as f:
        text = extract_text(filename, f.read())

    if not text.strip():
        print("No text found to index.")
        return False

    return client.upload_document(filename, text)


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    token = os.getenv("API_TOKEN")
    if len(argv) < 1 or not token:
        print("Usage: API_TOKEN=<token> python -m consultancy_api.index_local /path/to/file.pdf [...]")
        return 1

    client = ApiClient(API_BASE_URL, token=token)
    failed = 0
    for path in argv:
        try:
            ok = index_file(path, client)
        except ValidationError as e:
            print(f"Skipped {path}: {e.detail}")
            ok = False
        print(f"{'✅ Uploaded' if ok else '❌ Failed'} {path}")
        failed += 0 if ok else 1
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())

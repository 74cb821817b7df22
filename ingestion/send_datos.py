import json
import os
import sys

import requests

DATOS_URL = os.getenv("DATOS_URL", "http://localhost:3000/api/datos")


def load_payload(raw):
    """
    Parse the JSON document to send. Raises ValueError when it is not JSON.
    """
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"payload is not valid JSON: {e.msg} (line {e.lineno}, column {e.colno})") from e


def send_datos(payload, url=DATOS_URL, timeout=10):
    response = requests.post(url, json=payload, timeout=timeout)
    response.raise_for_status()
    return response.json()


def main(argv=None):
    args = sys.argv[1:] if argv is None else argv
    if len(args) > 1:
        print(f"[ERROR] Expected one JSON document, got {len(args)} arguments")
        return 1
    raw = args[0] if args else sys.stdin.read()

    try:
        payload = load_payload(raw)
    except ValueError as e:
        print(f"[ERROR] {e}")
        return 1

    try:
        ack = send_datos(payload)
    except requests.exceptions.JSONDecodeError:
        print(f"[ERROR] {DATOS_URL} answered with a non-JSON body")
        return 1
    except requests.exceptions.RequestException as e:
        print(f"[ERROR] Could not deliver to {DATOS_URL}: {e}")
        return 1

    print("[ACK]", ack)
    return 0


if __name__ == "__main__":
    sys.exit(main())

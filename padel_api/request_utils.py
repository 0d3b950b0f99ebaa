from flask import request


def json_payload():
    """Return the request's JSON object body, or an empty dict for anything else."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}

from sendcov.output.json import encode_payload, format_json, serialize

__all__ = ["encode_payload", "format_json", "serialize"]

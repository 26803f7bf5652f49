from pathlib import Path

from quota_admin.core.config import get_settings

_UNSAFE_CHARS = ("/", "\\", "\0")


def codes_to_text(codes: list[str]) -> str:
    return "".join(f"{code}\n" for code in codes)


def export_filename(name: str) -> str:
    safe = name
    for ch in _UNSAFE_CHARS:
        safe = safe.replace(ch, "_")
    return f"{safe.strip() or 'redemption'}.txt"


def write_codes(codes: list[str], name: str, directory: str | Path | None = None) -> Path:
    """Write one code per line to ``<directory>/<name>.txt`` and return the path."""
    target_dir = Path(directory or get_settings().export_dir).expanduser()
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / export_filename(name)
    path.write_text(codes_to_text(codes), encoding="utf-8")
    return path

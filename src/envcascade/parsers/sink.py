"""Writing parsed entries into an environment table."""

from typing import MutableMapping, Optional

from envcascade.logger import Logger


def write_entry(
    environ: MutableMapping[str, str],
    key: str,
    value: str,
    logger: Optional[Logger] = None,
) -> bool:
    """Set ``environ[key] = value``, last write wins.

    ``os.environ`` rejects some names (empty, or containing ``=`` or NUL);
    such an entry is skipped with a warning and False is returned.
    """
    try:
        environ[key] = value
    except ValueError as exc:
        if logger is not None:
            logger.warning("Environment refused key", key=key, reason=str(exc))
        return False
    return True

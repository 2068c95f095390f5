"""
Copia de assets estáticos (css/js) del paquete a la app consumidora.

Los archivos se copian a {target_dir}/centymo/ para mantenerlos
separados de los assets propios de la app.
"""

import logging
import shutil
from pathlib import Path
from typing import Union

from centymo.core.exceptions import CentymoException

logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parent.parent
STATIC_DIR = PACKAGE_DIR / "static"


class AssetCopyError(CentymoException):
    """No se pudo escribir en el directorio destino"""


def _copy_dir_files(src_dir: Path, dst_dir: Path, pattern: str) -> int:
    try:
        dst_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise AssetCopyError(f"Failed to create target directory {dst_dir}: {e}") from e

    copied = 0
    for src_file in sorted(src_dir.glob(pattern)):
        if not src_file.is_file():
            continue
        try:
            data = src_file.read_bytes()
        except OSError as e:
            logger.warning(f"Failed to read {src_file}: {e}")
            continue

        dst_file = dst_dir / src_file.name
        try:
            dst_file.write_bytes(data)
        except OSError as e:
            raise AssetCopyError(f"Failed to write {dst_file}: {e}") from e
        copied += 1

    return copied


def copy_styles(target_dir: Union[str, Path]) -> int:
    """Copiar static/css/*.css a {target_dir}/centymo/"""
    src_dir = STATIC_DIR / "css"
    dst_dir = Path(target_dir) / "centymo"

    copied = _copy_dir_files(src_dir, dst_dir, "*.css")
    if copied == 0:
        logger.warning(f"centymo: no CSS files found in {src_dir}")
        return 0

    logger.info(f"Copied {copied} centymo styles to: {dst_dir}")
    return copied


def copy_static_assets(target_dir: Union[str, Path]) -> int:
    """Copiar static/js/*.js a {target_dir}/centymo/"""
    src_dir = STATIC_DIR / "js"
    dst_dir = Path(target_dir) / "centymo"

    copied = _copy_dir_files(src_dir, dst_dir, "*.js")
    if copied == 0:
        logger.warning(f"centymo: no JS files found in {src_dir}")
        return 0

    logger.info(f"Copied {copied} centymo assets to: {dst_dir}")
    return copied

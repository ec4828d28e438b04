"""Ciclo de vida dos arquivos de audio no scratch directory.

Cada request materializa no maximo um arquivo local. Este modulo cria
nomes unicos, grava bytes, copia uploads, baixa URLs via streaming e
remove arquivos sem nunca propagar erro de delecao.
"""

from __future__ import annotations

import time
import uuid
from pathlib import Path
from typing import TYPE_CHECKING

import httpx

from voice_processor.exceptions import DownloadError
from voice_processor.logging import get_logger

if TYPE_CHECKING:
    from starlette.datastructures import UploadFile

logger = get_logger("storage.tempfiles")

# Formato assumido para audio baixado ou decodificado. O conteudo nao e
# inspecionado; o provider de transcricao tolera outros containers.
DEFAULT_AUDIO_SUFFIX = ".mp3"

CHUNK_SIZE_BYTES = 64 * 1024


def scratch_file_path(
    scratch_dir: Path,
    prefix: str,
    suffix: str = DEFAULT_AUDIO_SUFFIX,
) -> Path:
    """Retorna um caminho novo e unico dentro do scratch directory.

    Cria o diretorio se nao existir. O nome combina timestamp em
    nanossegundos com um componente aleatorio, entao requests concorrentes
    nunca colidem.
    """
    scratch_dir.mkdir(parents=True, exist_ok=True)
    return scratch_dir / f"{prefix}_{time.time_ns()}_{uuid.uuid4().hex[:12]}{suffix}"


def write_audio_bytes(data: bytes, dest: Path) -> Path:
    """Grava bytes de audio em ``dest``, criando o diretorio pai."""
    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_bytes(data)
    return dest


async def spool_upload(upload: UploadFile, scratch_dir: Path) -> Path:
    """Copia um upload multipart para o scratch directory em chunks.

    Mantem a extensao do nome enviado pelo cliente, se houver. Se a copia
    falhar, o arquivo parcial e removido antes de propagar o erro.

    Returns:
        Path do arquivo gravado.
    """
    suffix = Path(upload.filename).suffix if upload.filename else ""
    dest = scratch_file_path(scratch_dir, "upload", suffix or DEFAULT_AUDIO_SUFFIX)

    try:
        with dest.open("wb") as f:
            while chunk := await upload.read(CHUNK_SIZE_BYTES):
                f.write(chunk)
    except BaseException:
        cleanup_file(dest)
        raise

    logger.debug("upload_spooled", path=str(dest), filename=upload.filename)
    return dest


def cleanup_file(path: Path) -> bool:
    """Remove ``path`` se existir.

    Arquivo inexistente nao e erro. Qualquer outra falha de remocao e
    logada e engolida: a limpeza nunca mascara o resultado da request.

    Returns:
        True se o arquivo foi removido, False caso contrario.
    """
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError as exc:
        logger.warning("cleanup_failed", path=str(path), error=str(exc))
        return False

    logger.debug("file_removed", path=str(path))
    return True


class AudioDownloader:
    """Baixa audio remoto para disco via streaming (httpx).

    O corpo da resposta nunca e bufferizado inteiro em memoria. O
    ``httpx.AsyncClient`` e compartilhado entre requests e fechado em
    :meth:`aclose`.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        timeout_s: float = 60.0,
        retries: int = 2,
    ) -> None:
        if client is None:
            client = httpx.AsyncClient(
                timeout=httpx.Timeout(timeout_s),
                follow_redirects=True,
                transport=httpx.AsyncHTTPTransport(retries=retries),
            )
        self._client = client

    async def download(self, url: str, dest: Path) -> Path:
        """Baixa ``url`` para ``dest``.

        Raises:
            DownloadError: Em erro de rede, status HTTP nao-2xx ou erro de
                escrita em disco.
        """
        size_bytes = 0

        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            async with self._client.stream("GET", url) as response:
                if not response.is_success:
                    raise DownloadError(url, f"status HTTP {response.status_code}")
                with dest.open("wb") as f:
                    async for chunk in response.aiter_bytes(CHUNK_SIZE_BYTES):
                        f.write(chunk)
                        size_bytes += len(chunk)
        except httpx.InvalidURL as exc:
            raise DownloadError(url, f"URL invalida ({exc})") from exc
        except httpx.HTTPError as exc:
            raise DownloadError(url, f"{type(exc).__name__}: {exc}") from exc
        except OSError as exc:
            raise DownloadError(url, f"erro de escrita em disco ({exc})") from exc

        logger.info("download_complete", url=url, path=str(dest), size_bytes=size_bytes)
        return dest

    async def aclose(self) -> None:
        await self._client.aclose()

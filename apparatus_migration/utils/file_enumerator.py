"""
Enumeração dos arquivos de entrada (diretório + máscara).

A máscara é um glob (default) ou uma expressão regular aplicada ao nome
do arquivo; opcionalmente percorre subdiretórios.

    >>> list(enumerate_files("corpus", "*-app.xml"))
    [PosixPath('corpus/verg-aen-app.xml'), ...]
"""

import fnmatch
import re
from pathlib import Path
from typing import Iterator, Union

APP_SUFFIX = "-app."


def enumerate_files(
    directory: Union[str, Path],
    mask: str,
    regex_mask: bool = False,
    recursive: bool = False,
) -> Iterator[Path]:
    """
    Arquivos de directory cujo nome casa com mask, em ordem alfabética.

    Raises:
        FileNotFoundError: se o diretório não existir
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f"Diretório não encontrado: {directory}")

    if regex_mask:
        pattern = re.compile(mask, re.IGNORECASE)
        matches = lambda name: pattern.search(name) is not None  # noqa: E731
    else:
        matches = lambda name: fnmatch.fnmatch(name, mask)  # noqa: E731

    candidates = directory.rglob("*") if recursive else directory.iterdir()
    for path in sorted(candidates):
        if path.is_file() and matches(path.name):
            yield path


def text_path_for(app_path: Union[str, Path]) -> Path:
    """
    Caminho do texto base de um documento de aparato:
    "verg-aen-app.xml" -> "verg-aen.xml".
    """
    app_path = Path(app_path)
    name = app_path.name
    if APP_SUFFIX not in name:
        raise ValueError(f"Nome de aparato sem '{APP_SUFFIX}': {name}")
    return app_path.with_name(name.replace(APP_SUFFIX, ".", 1))


def document_id_for(app_path: Union[str, Path]) -> str:
    """ID do documento: nome do texto base sem extensão ("verg-aen")."""
    return text_path_for(app_path).stem

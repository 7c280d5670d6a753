"""Shared pytest fixtures: small TMX documents built in memory."""

import base64
import gzip
import zlib
from pathlib import Path
from typing import Iterable, Sequence

import numpy as np
import pytest


class TmxBuilder:
    """Builds TMX documents as strings for tests."""

    @staticmethod
    def pack(gids: Sequence[int], compression: str = "") -> str:
        raw = np.array(gids, dtype='<u4').tobytes()
        if compression == "zlib":
            raw = zlib.compress(raw)
        elif compression == "gzip":
            raw = gzip.compress(raw)
        return base64.b64encode(raw).decode('ascii')

    @staticmethod
    def csv_layer(name: str, gids: Iterable[int], attrs: str = "") -> str:
        body = ",".join(str(g) for g in gids)
        return (f'<layer name="{name}" {attrs}>\n'
                f'  <data encoding="csv">\n{body}\n</data>\n'
                f'</layer>')

    @classmethod
    def base64_layer(cls, name: str, gids: Sequence[int], compression: str = "",
                     attrs: str = "") -> str:
        comp = f' compression="{compression}"' if compression else ''
        return (f'<layer name="{name}" {attrs}>\n'
                f'  <data encoding="base64"{comp}>\n   {cls.pack(gids, compression)}\n  </data>\n'
                f'</layer>')

    @staticmethod
    def inline_layer(name: str, gids: Iterable[int], attrs: str = "") -> str:
        tiles = "".join(f'<tile gid="{g}"/>' if g else '<tile/>' for g in gids)
        return f'<layer name="{name}" {attrs}><data>{tiles}</data></layer>'

    @staticmethod
    def document(body: str = "", width: int = 2, height: int = 2,
                 class_name: str = "town", tilesets=((1, "tiles.tsx"),),
                 tilewidth: int = 16, tileheight: int = 16) -> str:
        tileset_xml = "\n".join(
            f'<tileset firstgid="{firstgid}" source="{source}"/>' if source
            else f'<tileset firstgid="{firstgid}" name="embedded" tilewidth="{tilewidth}" '
                 f'tileheight="{tileheight}" tilecount="16" columns="4"/>'
            for firstgid, source in tilesets)
        return (f'<?xml version="1.0" encoding="UTF-8"?>\n'
                f'<map version="1.10" orientation="orthogonal" class="{class_name}" '
                f'width="{width}" height="{height}" '
                f'tilewidth="{tilewidth}" tileheight="{tileheight}">\n'
                f'{tileset_xml}\n{body}\n</map>\n')


@pytest.fixture
def tmx() -> type:
    return TmxBuilder


@pytest.fixture
def write_map(tmp_path: Path):
    """Write a TMX document below tmp_path and return its path."""

    def write(relative: str, document: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(document, encoding='utf-8')
        return path

    return write

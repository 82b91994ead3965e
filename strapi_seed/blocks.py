"""
Dynamic zone block rewriting.

Blocks are dicts tagged by "__component". Variants that embed media carry
bare file names in the fixture; rewriting swaps them for media library ids.
"""
from typing import Any, Callable, Dict, List

from .media import MediaLibrary

Block = Dict[str, Any]


def _rewrite_media(block: Block, media: MediaLibrary) -> Block:
    block_copy = dict(block)
    block_copy["file"] = media.resolve([block["file"]])
    return block_copy


def _rewrite_slider(block: Block, media: MediaLibrary) -> Block:
    block_copy = dict(block)
    block_copy["files"] = media.resolve(block["files"])
    return block_copy


BLOCK_REWRITERS: Dict[str, Callable[[Block, MediaLibrary], Block]] = {
    "shared.media": _rewrite_media,
    "shared.slider": _rewrite_slider,
}


def update_blocks(blocks: List[Block], media: MediaLibrary) -> List[Block]:
    """
    Return a new block list with media fields resolved.
    Blocks of other variants are passed through as the same objects.
    """
    updated_blocks = []
    for block in blocks:
        rewrite = BLOCK_REWRITERS.get(block.get("__component"))
        updated_blocks.append(rewrite(block, media) if rewrite else block)
    return updated_blocks

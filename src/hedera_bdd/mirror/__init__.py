"""Mirror node: eventually consistent read access to published messages."""

from hedera_bdd.mirror.client import MirrorNodeClient, decode_message

__all__ = ["MirrorNodeClient", "decode_message"]

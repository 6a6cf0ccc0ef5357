from dataclasses import dataclass


@dataclass(frozen=True)
class QuickReply:
    title: str
    payload: str

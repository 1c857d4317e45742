"""Wire protocol events and the frame codec."""

from .codec import decode_frame, encode_event
from .inbound import Hello, InboundEvent, ToolInvoke, UserMessage
from .outbound import AssistantDelta, AssistantDone, ErrorEvent, OutboundEvent, ToolMessage

__all__ = [
    "AssistantDelta",
    "AssistantDone",
    "ErrorEvent",
    "Hello",
    "InboundEvent",
    "OutboundEvent",
    "ToolInvoke",
    "ToolMessage",
    "UserMessage",
    "decode_frame",
    "encode_event",
]

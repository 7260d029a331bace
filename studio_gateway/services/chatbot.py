"""
Keyword chatbot for the public site.
Replies come from a fixed list of canned answers; no language model is called.
"""
import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Literal, Optional, Tuple

logger = logging.getLogger(__name__)

REPLY_DELAY_SECONDS = 0.8

QUICK_REPLIES: List[Tuple[str, str]] = [
    ("Our Services", "What services do you offer?"),
    ("Pricing Info", "What are your pricing options?"),
    ("Book Session", "How can I book a photography session?"),
    ("Portfolio", "Can I see your portfolio?"),
    ("Studio Location", "Where is your studio located?"),
    ("Contact Info", "How can I contact you?"),
]

STUDIO_ABOUT = (
    "Founded with a passion for capturing life's most meaningful moments, our studio has grown into "
    "a trusted destination for professional photography. Every project begins with a simple belief: "
    "moments deserve to be preserved with care, intention, and beauty. We don't just take photos, "
    "we craft visual stories meant to last generations."
)

STUDIO_EXPERIENCE = {
    "years": "10+ Years of Creative excellence",
    "clients": "500+ Trusted partnerships",
    "photos": "50K+ Moments preserved",
}

PRICING_REPLY = (
    "Our pricing varies based on the type of session, duration, and deliverables. We offer flexible "
    "packages designed to suit different needs and budgets. Contact us for a detailed, personalized "
    "quote. Your satisfaction is our priority, and we're committed to exceeding your expectations."
)

FALLBACK_REPLY = (
    "Thank you for your message! I'd be happy to help you with information about our photography "
    "services, pricing, booking, or anything else. You can also use the quick reply buttons below "
    "for common questions!"
)

# Checked in order; the first rule with a matching keyword answers.
# Any message mentioning price gets the pricing answer.
RULES: List[Tuple[Tuple[str, ...], str]] = [
    (("price", "pricing", "cost"), PRICING_REPLY),
    (
        ("service", "offer"),
        "We offer a wide range of professional photography services including portraits, events, "
        "weddings, commercial photography, and creative shoots. Each service is tailored to capture "
        "your unique story with artistic excellence. With 10+ years of experience and 500+ satisfied "
        "clients, we ensure the highest standards of professional quality.",
    ),
    (
        ("book", "appointment", "schedule", "session"),
        "Booking a session is easy! Contact us to discuss your vision, and we'll schedule a time that "
        "works best for you. Every project begins with understanding your story and creating a "
        "collaborative experience. We're committed to making your session comfortable and memorable.",
    ),
    (
        ("portfolio", "work", "examples", "photos"),
        "We've preserved over 50,000 moments for 500+ clients! Our portfolio showcases diverse "
        "photography styles across portraits, events, weddings, and commercial work. Each image "
        "reflects our artistic vision and professional quality. We'd love to show you examples "
        "relevant to your needs!",
    ),
    (
        ("contact", "reach", "phone", "email"),
        "You can reach us through our website contact form, by phone, or by visiting The G-Limit "
        "Studio in person. We're here to answer all your questions and help bring your creative "
        "vision to life. Let us know how we can help!",
    ),
    (
        ("location", "where", "address", "studio"),
        "The G-Limit Studio is our thoughtfully designed creative space that empowers creativity, "
        "precision, and artistic freedom. Visit us to experience our professional equipment, "
        "production capabilities, and inspiring creative environment with natural light and "
        "versatile backdrops.",
    ),
    (
        ("about", "who", "values"),
        STUDIO_ABOUT + " Our values include Artistic Excellence, Professional Quality, Personal "
        "Connection, and Client Commitment. We believe in creating meaningful, beautiful images that "
        "last generations.",
    ),
    (
        ("experience", "years"),
        f"With {STUDIO_EXPERIENCE['years']}, we've built {STUDIO_EXPERIENCE['clients']} and preserved "
        f"{STUDIO_EXPERIENCE['photos']}. Our experience speaks to our commitment to excellence and our "
        "clients' trust in us.",
    ),
    (
        ("hello", "hi", "hey"),
        "Hello! Welcome to G-Limit Studio. How can we help you today? Feel free to ask about our "
        "services, pricing, or use the quick replies below!",
    ),
    (
        ("thank",),
        "You're welcome! If you have any other questions about our photography services or would like "
        "to book a session, just let us know. We're here to help!",
    ),
]


def get_bot_response(user_message: str) -> str:
    """
    Pick the canned reply for a visitor message.

    Args:
        user_message: Raw text typed by the visitor

    Returns:
        str: First matching canned answer, or the generic fallback
    """
    message = user_message.lower()
    for keywords, reply in RULES:
        if any(keyword in message for keyword in keywords):
            return reply
    return FALLBACK_REPLY


@dataclass
class ChatMessage:
    text: str
    sender: Literal["user", "bot"]
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class ChatSession:
    """Message history of one chat widget, with the typing delay before each reply."""

    def __init__(self, reply_delay: float = REPLY_DELAY_SECONDS):
        self.reply_delay = reply_delay
        self.messages: List[ChatMessage] = []
        self.is_typing = False

    async def send(self, text: str) -> Optional[ChatMessage]:
        """
        Append the visitor message, wait, then append the bot reply.

        Returns:
            The bot message, or None when the input was blank
        """
        if not text or not text.strip():
            return None

        self.messages.append(ChatMessage(text=text, sender="user"))
        logger.debug(f"Chat message received ({len(text)} chars)")
        self.is_typing = True
        try:
            await asyncio.sleep(self.reply_delay)
            reply = ChatMessage(text=get_bot_response(text), sender="bot")
            self.messages.append(reply)
        finally:
            self.is_typing = False
        return reply

    async def send_quick_reply(self, label: str) -> Optional[ChatMessage]:
        for quick_label, message in QUICK_REPLIES:
            if quick_label == label:
                return await self.send(message)
        raise KeyError(f"Unknown quick reply: {label}")

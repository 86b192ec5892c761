"""Style and theme constants for HTML rendering."""

from gift_builder.core.block import Align, Background, BlockType, Padding

# Background colors that do not depend on the theme; PRIMARY_TINT uses
# the theme's secondary color.
BACKGROUND_COLORS = {
    Background.TRANSPARENT: "transparent",
    Background.WHITE: "rgba(255,255,255,0.9)",
    Background.DARK: "rgba(0,0,0,0.8)",
}

PADDING = {
    Padding.COMPACT: "1rem",
    Padding.NORMAL: "2rem",
    Padding.SPACIOUS: "4rem",
}

FLEX_ALIGN = {
    Align.LEFT: "flex-start",
    Align.CENTER: "center",
    Align.RIGHT: "flex-end",
}

FONT_STACKS = {
    "font-sans": "ui-sans-serif, system-ui, sans-serif",
    "font-serif": "ui-serif, Georgia, serif",
    "font-mono": "ui-monospace, SFMono-Regular, monospace",
    "font-handwriting": "'Caveat', 'Comic Sans MS', cursive",
}

# Utility-class backgrounds used by the presets, as plain CSS.
THEME_BACKGROUNDS = {
    "bg-gradient-to-br from-rose-50 to-pink-100": "linear-gradient(to bottom right, #fff1f2, #fce7f3)",
    "bg-gradient-to-br from-amber-50 to-orange-100": "linear-gradient(to bottom right, #fffbeb, #ffedd5)",
    "bg-slate-50": "#f8fafc",
    "bg-slate-900": "#0f172a",
}

BLOCK_LABELS = {
    BlockType.HERO: "Heading",
    BlockType.SECTION: "Divider",
    BlockType.NOTE: "Note",
    BlockType.SPACER: "Spacer",
    BlockType.TIMELINE: "Timeline",
    BlockType.WISDOM: "Daily Wisdom",
    BlockType.COUPON: "Coupon",
    BlockType.OPEN_WHEN: "Open When",
    BlockType.GALLERY: "Gallery",
    BlockType.VIDEO: "Video",
    BlockType.MUSIC: "Music",
    BlockType.VOICE: "Voice Message",
    BlockType.DRAWING: "Drawing",
    BlockType.QUIZ: "Quiz",
    BlockType.POLL: "Poll",
    BlockType.GAME: "Memory Game",
    BlockType.SPIN_WHEEL: "Spin Wheel",
    BlockType.DICE: "Dice",
    BlockType.SECRET: "Secret",
    BlockType.COUNTDOWN: "Countdown",
    BlockType.MAP: "Map",
}

BLOCK_ICONS = {
    BlockType.HERO: "\U0001f381",  # gift
    BlockType.NOTE: "\U0001f4ac",  # speech bubble
    BlockType.TIMELINE: "\U0001f550",  # clock
    BlockType.WISDOM: "☀",  # sun
    BlockType.COUPON: "\U0001f39f",  # ticket
    BlockType.OPEN_WHEN: "✉",  # envelope
    BlockType.MUSIC: "\U0001f3b5",  # note
    BlockType.QUIZ: "❓",  # question mark
    BlockType.POLL: "\U0001f4ca",  # bar chart
    BlockType.SECRET: "\U0001f512",  # lock
    BlockType.COUNTDOWN: "⏳",  # hourglass
    BlockType.MAP: "\U0001f4cd",  # pin
}

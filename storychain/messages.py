"""User-facing texts."""

GENERIC_FAILURE = "❌ This operation could not be completed."
ADMIN_ONLY = "❌ Only server administrators can use this command."
UNKNOWN_COMMAND = "❌ Unknown command: {command}"

NO_STORY_IN_PROGRESS = "❌ No story in progress."
NOT_CONFIGURED = "❌ No story channel is configured."

SINGLE_WORD_ONLY = "❌ You can only send **one word** at a time!"

SETUP_CONFIRMATION = (
    "✅ <#{channel_id}> is now set up for collaborative stories!\n\n"
    "**How does it work?**\n"
    "• Each member sends **one word** at a time\n"
    "• The story ends automatically when a word ends with `.`, `!` or `?`"
)
SETUP_ANNOUNCEMENT = (
    "📖 **New collaborative story!**\n"
    "Send one word at a time to build a story together. "
    "End it with a period (.)!"
)

END_CONFIRMATION = "✅ Story ended and saved!"

RESET_CONFIRMATION = "✅ Story reset!"
RESET_ANNOUNCEMENT = (
    "🔄 **Story reset by an administrator.**\n"
    "A new story starts now!"
)

DISABLE_CONFIRMATION = "✅ The story channel has been disabled."
DISABLE_ANNOUNCEMENT = "🛑 **The collaborative story game has been disabled.**"

NEW_STORY_ANNOUNCEMENT = "📖 **New story!** Off we go on a new collaborative adventure!"

STATUS_EMPTY = "📖 No story in progress."
STATUS_REPORT = "📖 **Story in progress** ({words} words, {participants} participants)\n\n{text}"

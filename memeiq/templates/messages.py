"""
Message templates for Telegram bot.

All static user-facing messages are defined here for consistent
messaging. Uses HTML formatting for Telegram. Templates with
placeholders are filled with str.format by the handlers.

Template naming convention:
- WELCOME, HELP, UPGRADE, TRENDING - informational messages
- ANALYZING - placeholder shown while the API call runs
- WATCHLIST_*, ALERT_* - watchlist callbacks
- ADMIN_* - admin command replies
- ERROR_* - error messages
"""

# =============================================================================
# Informational Messages
# =============================================================================

WELCOME = """
🧠 <b>Welcome to MemeIQ!</b>

I analyze Solana meme coins in seconds: liquidity, volume, holder
concentration and an overall safety score.

<b>How to use:</b>
• Paste a token address into the chat
• Or use /analyze &lt;address&gt;

<i>Example:</i>
<code>DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263</code>

🆓 Free plan: {daily_limit} analyses per day.
Type /help to see all commands.
""".strip()

REFERRAL_APPLIED = """
🎁 You joined through a friend's invite. Welcome aboard!
""".strip()

REFERRAL_NEW_FRIEND = """
🎉 A new user joined MemeIQ with your referral link! Total referrals: {count}
""".strip()

HELP = """
<b>📖 MemeIQ Commands</b>

/analyze &lt;address&gt; - full token analysis
/quick &lt;address&gt; - short summary
/watchlist - your watched tokens
/stats - your usage and referral link
/trending - trending tokens
/upgrade - plans and limits
/help - this message

<b>What the score means:</b>
✅ 80-100 - healthy metrics
⚠️ 60-79 - mixed signals, be careful
🔴 0-59 - high risk

<b>Recommendations:</b>
💚 BUY · ⚠️ CAUTION · 🛑 AVOID

You can also paste any Solana address and I will pick it up automatically.

<i>Not financial advice. Always do your own research.</i>
""".strip()

UPGRADE = """
🚀 <b>Upgrade MemeIQ</b>

🆓 <b>Free</b>
• {daily_limit} analyses per day
• Watchlist up to {watchlist_limit} tokens

⭐ <b>Pro</b>
• Unlimited analyses
• Unlimited watchlist
• Price alerts

🐋 <b>Whale</b>
• Everything in Pro
• Priority access to new features

Upgrade here: {website_url}/pricing
""".strip()

TRENDING = """
🔥 <b>Trending Tokens</b>

Live trending data is coming soon to the bot.
Meanwhile, see what's hot on the web: {website_url}/trending
""".strip()

ANALYZING = """
🔍 Analyzing token...
<i>This can take up to 30 seconds.</i>
""".strip()

ANALYZE_USAGE = """
Send the token address after the command:
<code>/{command} DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263</code>
""".strip()

# =============================================================================
# Watchlist and alerts
# =============================================================================

WATCHLIST_ADDED = "⭐ Added to your watchlist"
WATCHLIST_REMOVED = "🗑 Removed from your watchlist"
WATCHLIST_NOT_FOUND = "This token is not in your watchlist"
ALERT_SET = "🔔 Alert saved. Alert notifications are coming soon."
ALERT_EXISTS = "🔔 You already have an alert for this token"

# =============================================================================
# Admin
# =============================================================================

ADMIN_ONLY = "⛔ This command is for admins only."

ADMIN_TIER_USAGE = """
Usage: <code>/admin tier &lt;user_id&gt; &lt;free|pro|whale&gt;</code>
""".strip()

ADMIN_TIER_CHANGED = "✅ User <code>{user_id}</code> is now <b>{tier}</b>."

# =============================================================================
# Error Messages
# =============================================================================

ERROR_GENERIC = """
😔 Sorry, something went wrong. Please try again later.
""".strip()

ERROR_BAD_CALLBACK = "Unknown action"

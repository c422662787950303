"""Telegram bot message templates and constants.

Contains all user-facing message templates, notices and formatting constants
for bot responses. Centralizes message management so every handler and
middleware speaks with the same voice.
"""

# Bot commands and descriptions
WELCOME_MESSAGE = (
    "🔥 Welcome to the Susumi Pioneer Validator Pre-Sale!\n\n"
    "Mint your Commander, Counsellor, or Chancellor Pioneer NFTs directly here in Telegram.\n\n"
    "These NFTs offer exclusive Pioneer Bonus Token Entitlements, Revenue Share and "
    "Governance Rights on Susumi.\n\n"
    "Use the commands below to explore:\n\n"
    "/tiers /price /supply /phase /mint\n\n"
    "You are now part of the next evolution of Susumi!"
)

COMMAND_DESCRIPTIONS = {
    "start": "🚀 Start the bot",
    "tiers": "🎯 View all NFT tiers and benefits",
    "price": "💰 Check current pricing",
    "supply": "📈 View supply information",
    "phase": "📊 Learn about pricing phases",
    "mint": "🪙 Get instructions to mint NFTs",
    "help": "📚 Show the help message",
}

# Tiers
TIERS_HEADER = "🎯 *Pioneer Validator NFT Tiers*"
TIER_NAME_LINE = "*{name}*"
TIER_PRICE_LINE = "💰 Price: {price}"
TIER_ENTITLEMENT_LINE = "🎁 Entitlement: {entitlement}"
TIER_MAX_SUPPLY_LINE = "📦 Max Supply: {max_supply}"
TIER_DESCRIPTION_LINE = "📝 {description}"
TIERS_FOOTER = "Use /mint to purchase NFTs or click the button below to open the launchpad."

# Prices
PRICE_HEADER = "💰 *Current NFT Prices*"
PRICE_TIER_LINE = "*{name}*: {price}"
PRICE_ENTITLEMENT_LINE = "   Entitlement: {entitlement}"
PRICE_FOOTER = (
    "💡 Prices are dynamic and may change based on supply milestones.\n\n"
    "Click below to view real-time pricing in the launchpad."
)

# Supply
SUPPLY_HEADER = "📈 *NFT Supply Information*"
SUPPLY_TOKEN_ID_LINE = "🆔 Token ID: {token_id}"
SUPPLY_FOOTER = "💡 Real-time supply data is available in the launchpad."

PHASE_MESSAGE = (
    "🎯 *Current Phase Information*\n\n"
    "The launchpad uses a dynamic 4-phase pricing system:\n\n"
    "*Phase 1 - Early Bird*\n"
    "- Lowest prices\n"
    "- Highest SUSU+ entitlements\n\n"
    "*Phase 2 - Standard*\n"
    "- Moderate pricing\n"
    "- Good value\n\n"
    "*Phase 3 - Advanced*\n"
    "- Higher pricing\n"
    "- Still competitive\n\n"
    "*Phase 4 - Final Rush*\n"
    "- Final pricing tier\n"
    "- Last chance pricing\n\n"
    "💡 Current phase depends on supply milestones for each tier.\n"
    "📊 Check the launchpad for real-time phase information."
)

MINT_MESSAGE = (
    "🚀 *Mint Pioneer Validator NFTs*\n\n"
    "To mint your NFTs:\n\n"
    "1️⃣ Click \"Open Launchpad\" below\n"
    "2️⃣ Connect your wallet (MetaMask, Trust Wallet, etc.)\n"
    "3️⃣ Select your desired tier (Commander, Counsellor, or Chancellor)\n"
    "4️⃣ Choose quantity and payment method (USDT/USDC)\n"
    "5️⃣ Complete the transaction\n\n"
    "💡 All transactions are on-chain via Polygon network.\n"
    "🔒 Your funds are secure - the bot never asks for your seed phrase.\n\n"
    "Ready to mint? Click the button below!"
)

HELP_MESSAGE = (
    "📚 *Susumi Pioneer Bot Commands*\n\n"
    "*Available Commands:*\n"
    "/tiers - View all NFT tiers and benefits\n"
    "/price - Check current pricing\n"
    "/supply - View supply information\n"
    "/phase - Learn about pricing phases\n"
    "/mint - Get instructions to mint NFTs\n"
    "/help - Show this help message\n\n"
    "*About Pioneer NFTs:*\n"
    "• Utility NFTs with governance rights\n"
    "• Revenue sharing from platform fees\n"
    "• SUSU+ token entitlements\n"
    "• Access to Validator Fund\n\n"
    "*Security:*\n"
    "✅ All purchases are on-chain via Polygon\n"
    "✅ Bot never asks for seed phrases or private keys\n"
    "✅ Connect wallet securely via WalletConnect\n\n"
    "*Need Support?*\n"
    "Visit https://susumi.io or use the launchpad for more information."
)

# Launchpad button
LAUNCHPAD_BUTTON_TEXT = "🚀 Open Launchpad"

# Middleware notices
RATE_LIMIT_MESSAGE = "⏳ Too many requests. Please wait a moment and try again."
GENERIC_ERROR_MESSAGE = (
    "❌ An unexpected error occurred. Please try again later or contact support "
    "if the issue persists."
)

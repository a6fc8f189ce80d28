from __future__ import annotations

import logging
from datetime import date, time
from typing import Any

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.error import BadRequest, TelegramError
from telegram.ext import Application, CallbackQueryHandler, CommandHandler, ContextTypes, MessageHandler, filters

from .catalog import DreamSymbol, EmptyCatalogError, SymbolCategory, load_catalog
from .config import Settings, configure_logging, load_settings
from .content import DAILY_SYMBOLS_INTRO, ENTRY_QUESTIONS, MILESTONE_INSIGHTS
from .daily_content import DailyContent
from .days import day_key, parse_day_key, resolve_timezone
from .db import Database
from .journal import format_entry_index, format_entry_summary, parse_answer, question_prompt
from .llm import SymbolLLM
from .scheduler import DailySymbolScheduler, SymbolWindow
from .streak import StreakState, milestone_progress, motivational_message, next_milestone, reached_milestone

logger = logging.getLogger(__name__)

SLOT_LABELS = {"yesterday": "Yesterday", "today": "Today", "tomorrow": "Tomorrow"}
NO_SYMBOLS_TEXT = "No dream symbols are available right now."
CONTENT_TITLES = {"fact": "✨ Dream Fact of the Day", "lesson": "🎓 Lucid Dreaming Lesson"}


def format_symbol_card(slot: str | None, day: date | None, symbol: DreamSymbol, detailed: bool = False) -> str:
    lines = []
    if slot is not None and day is not None:
        lines.append(f"{SLOT_LABELS.get(slot, slot.title())} · {day:%b} {day.day}")
    lines.append(f"{symbol.icon} {symbol.name}".strip())
    lines.append(f"{symbol.category.icon} {symbol.category.label}")
    lines.append("")
    lines.append(symbol.short_description)
    if detailed and symbol.detailed_description:
        lines.append("")
        lines.append(symbol.detailed_description)
    return "\n".join(lines)


def format_streak(state: StreakState, today: date) -> str:
    current = state.active(today)
    lines = [f"🔥 Current streak: {current} day{'s' if current != 1 else ''}", f"🏆 Best streak: {state.best}"]
    upcoming = next_milestone(current)
    if upcoming is None:
        lines.append("Every milestone reached.")
    else:
        lines.append(
            f"Next milestone: {upcoming} days ({upcoming - current} to go, {milestone_progress(current):.0%} there)"
        )
    if state.at_risk(today):
        lines.append("Log a dream today to keep your streak alive.")
    lines.append("")
    lines.append(motivational_message(current))
    return "\n".join(lines)


def reflect_callback(symbol: DreamSymbol, day: date | None = None) -> str:
    if day is None:
        return f"reflect:{symbol.id}"
    return f"reflect:{symbol.id}:{day_key(day)}"


def window_keyboard(window: SymbolWindow, selected: str) -> InlineKeyboardMarkup:
    nav = []
    for slot, _, _ in window.slots():
        mark = "• " if slot == selected else ""
        nav.append(InlineKeyboardButton(mark + SLOT_LABELS[slot], callback_data=f"day:{slot}"))
    day, symbol = window.slot(selected)
    return InlineKeyboardMarkup(
        [
            nav,
            [InlineKeyboardButton("📖 Read more", callback_data=f"sym:{symbol.id}")],
            [InlineKeyboardButton("🌙 Reflect tonight", callback_data=reflect_callback(symbol, day))],
        ]
    )


def reflect_keyboard(symbol: DreamSymbol) -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup([[InlineKeyboardButton("🌙 Reflect tonight", callback_data=reflect_callback(symbol))]])


def category_keyboard(categories: list[SymbolCategory]) -> InlineKeyboardMarkup:
    rows = [
        [InlineKeyboardButton(f"{c.icon} {c.label}", callback_data=f"cat:{c.value}")]
        for c in categories
    ]
    return InlineKeyboardMarkup(rows)


def symbol_list_keyboard(symbols: list[DreamSymbol]) -> InlineKeyboardMarkup:
    rows = [
        [InlineKeyboardButton(f"{s.icon} {s.name}".strip(), callback_data=f"sym:{s.id}")]
        for s in symbols
    ]
    return InlineKeyboardMarkup(rows)


class DailySymbolBot:
    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or load_settings()
        self.tz = resolve_timezone(self.settings.default_timezone)
        self.db = Database(self.settings.mongodb_uri, self.settings.mongodb_db)
        self.catalog = load_catalog(self.settings.symbol_catalog_file)
        self.scheduler = DailySymbolScheduler(self.db.symbol_store, self.catalog, tz=self.tz)
        self.llm = SymbolLLM(self.settings.openai_api_key, self.settings.openai_model)
        self.daily = DailyContent(self.db.symbol_store, self.llm, tz=self.tz)
        self.sessions: dict[int, dict[str, Any]] = {}

    def app(self) -> Application:
        application = Application.builder().token(self.settings.telegram_bot_token).post_init(self.post_init).build()

        application.add_handler(CommandHandler("start", self.start))
        application.add_handler(CommandHandler("menu", self.menu))
        application.add_handler(CommandHandler("symbols", self.symbols))
        application.add_handler(CommandHandler("symbol", self.lookup))
        application.add_handler(CommandHandler("daily", self.toggle_daily))
        application.add_handler(CommandHandler("entry", self.entry))
        application.add_handler(CommandHandler("cancel", self.cancel))
        application.add_handler(CommandHandler("journal", self.journal))
        application.add_handler(CommandHandler("streak", self.streak))
        application.add_handler(CommandHandler("fact", self.fact))
        application.add_handler(CommandHandler("lesson", self.lesson))

        application.add_handler(CallbackQueryHandler(self.on_callback))
        application.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, self.on_text))

        return application

    async def post_init(self, application: Application) -> None:
        self.scheduler.check_and_advance()

        rollover_name = "daily_symbol_rollover"
        if not application.job_queue.get_jobs_by_name(rollover_name):
            application.job_queue.run_daily(
                self.rollover,
                time=time(hour=0, minute=0, second=5, tzinfo=self.tz),
                name=rollover_name,
            )

        broadcast_name = "daily_symbol_broadcast"
        if not application.job_queue.get_jobs_by_name(broadcast_name):
            application.job_queue.run_daily(
                self.broadcast_today,
                time=time(hour=self.settings.daily_symbol_hour, minute=0, tzinfo=self.tz),
                name=broadcast_name,
            )

    def current_window(self) -> SymbolWindow | None:
        try:
            return self.scheduler.window()
        except EmptyCatalogError:
            logger.warning("Daily symbol window requested with an empty catalog")
            return None

    def main_menu_keyboard(self) -> InlineKeyboardMarkup:
        keys = [
            [InlineKeyboardButton("🔮 Daily Dream Symbols", callback_data="menu:symbols")],
            [
                InlineKeyboardButton("📝 New Dream Entry", callback_data="menu:entry"),
                InlineKeyboardButton("📓 Journal", callback_data="menu:journal"),
            ],
            [InlineKeyboardButton("🔥 Streak", callback_data="menu:streak")],
            [
                InlineKeyboardButton("✨ Dream Fact", callback_data="menu:fact"),
                InlineKeyboardButton("🎓 Lucid Lesson", callback_data="menu:lesson"),
            ],
            [InlineKeyboardButton("📚 Symbol Encyclopedia", callback_data="menu:browse")],
            [InlineKeyboardButton("💡 About Daily Symbols", callback_data="menu:about")],
        ]
        return InlineKeyboardMarkup(keys)

    def _register(self, update: Update) -> None:
        user = update.effective_user
        if user is None:
            return
        chat_id = update.effective_chat.id if update.effective_chat else None
        self.db.ensure_user(user.id, user.username, chat_id=chat_id)

    async def start(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        if update.message is None:
            return
        self._register(update)
        text = (
            "Lunara Dream Symbols activated.\n\n"
            "- A new dream symbol every day, with yesterday's and tomorrow's alongside\n"
            "- A dream journal with AI interpretation and a daily streak\n"
            "- A dream fact and a lucid dreaming lesson each day\n"
            "- An encyclopedia of common dream symbols by category\n\n"
            f"Today's symbol is delivered daily at {self.settings.daily_symbol_hour:02d}:00 "
            f"({self.settings.default_timezone}). Use /daily off to stop it.\n\n"
            "Use the menu below."
        )
        await update.message.reply_text(text, reply_markup=self.main_menu_keyboard())

    async def menu(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        if update.message is None:
            return
        self._register(update)
        await update.message.reply_text("Main menu", reply_markup=self.main_menu_keyboard())

    async def symbols(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        if update.message is None:
            return
        self._register(update)
        await self.send_window(update.message)

    async def lookup(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        if update.message is None:
            return
        query = " ".join(context.args or []).strip()
        if not query:
            await update.message.reply_text("Usage: /symbol NAME. Example: /symbol water")
            return

        matches = self.catalog.search(query)
        if not matches:
            await update.message.reply_text(f"No dream symbol matches '{query}'.")
            return
        if len(matches) == 1:
            symbol = matches[0]
            await update.message.reply_text(
                format_symbol_card(None, None, symbol, detailed=True),
                reply_markup=reflect_keyboard(symbol),
            )
            return
        await update.message.reply_text(
            f"{len(matches)} symbols match '{query}':", reply_markup=symbol_list_keyboard(matches)
        )

    async def toggle_daily(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        user = update.effective_user
        if update.message is None or user is None:
            return
        choice = (context.args or [""])[0].strip().lower()
        if choice not in {"on", "off"}:
            await update.message.reply_text("Usage: /daily on or /daily off")
            return
        self._register(update)
        self.db.set_daily_broadcast(user.id, choice == "on")
        await update.message.reply_text(
            "Daily symbol delivery enabled." if choice == "on" else "Daily symbol delivery disabled."
        )

    async def entry(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        user = update.effective_user
        if update.message is None or user is None:
            return
        self._register(update)
        await self.begin_entry(update.message, user.id)

    async def cancel(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        user = update.effective_user
        if user is None or update.message is None:
            return
        self.sessions.pop(user.id, None)
        await update.message.reply_text("Current flow canceled.", reply_markup=self.main_menu_keyboard())

    async def journal(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        user = update.effective_user
        if update.message is None or user is None:
            return
        self._register(update)
        await self.show_journal(update.message, user.id)

    async def streak(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        user = update.effective_user
        if update.message is None or user is None:
            return
        self._register(update)
        await self.show_streak(update.message, user.id)

    async def fact(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        if update.message is None:
            return
        await self.send_daily_content(update.message, "fact")

    async def lesson(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        if update.message is None:
            return
        await self.send_daily_content(update.message, "lesson")

    async def rollover(self, context: ContextTypes.DEFAULT_TYPE) -> None:
        if self.scheduler.check_and_advance():
            logger.info("Daily symbol window advanced to %s", self.scheduler.today())

    async def broadcast_today(self, context: ContextTypes.DEFAULT_TYPE) -> None:
        window = self.current_window()
        if window is None:
            return

        text = (
            "Today's Dream Symbol\n\n"
            + format_symbol_card("today", window.today_date, window.today, detailed=True)
            + f"\n\n{CONTENT_TITLES['fact']}\n{self.daily.get('fact', window.today_date)}"
        )
        for chat_id in self.db.get_broadcast_chats():
            try:
                await context.bot.send_message(chat_id=chat_id, text=text, reply_markup=window_keyboard(window, "today"))
            except TelegramError as exc:
                # User may have blocked the bot or chat is unavailable.
                logger.info("Skipping daily symbol for chat %s: %s", chat_id, exc)

    async def send_window(self, message, selected: str = "today") -> None:
        window = self.current_window()
        if window is None:
            await message.reply_text(NO_SYMBOLS_TEXT)
            return
        day, symbol = window.slot(selected)
        await message.reply_text(
            format_symbol_card(selected, day, symbol),
            reply_markup=window_keyboard(window, selected),
        )

    async def send_daily_content(self, message, kind: str) -> None:
        text = self.daily.get(kind)
        await message.reply_text(f"{CONTENT_TITLES[kind]}\n\n{text}")

    async def on_callback(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        query = update.callback_query
        user = update.effective_user
        if query is None or user is None:
            return
        self._register(update)
        await query.answer()

        kind, _, value = (query.data or "").partition(":")
        if kind == "menu":
            if value == "symbols":
                await self.send_window(query.message)
            elif value == "entry":
                await self.begin_entry(query.message, user.id)
            elif value == "journal":
                await self.show_journal(query.message, user.id)
            elif value == "streak":
                await self.show_streak(query.message, user.id)
            elif value in CONTENT_TITLES:
                await self.send_daily_content(query.message, value)
            elif value == "browse":
                await self.show_categories(query)
            elif value == "about":
                await query.message.reply_text(DAILY_SYMBOLS_INTRO)
        elif kind == "day":
            await self.switch_day(query, value)
        elif kind == "cat":
            await self.show_category(query, value)
        elif kind == "sym":
            await self.show_symbol(query, value)
        elif kind == "reflect":
            await self.reflect(query, value)

    async def switch_day(self, query, slot: str) -> None:
        if slot not in SLOT_LABELS:
            return
        window = self.current_window()
        if window is None:
            await query.message.reply_text(NO_SYMBOLS_TEXT)
            return
        day, symbol = window.slot(slot)
        try:
            await query.edit_message_text(
                format_symbol_card(slot, day, symbol),
                reply_markup=window_keyboard(window, slot),
            )
        except BadRequest as exc:
            # Tapping the day that is already shown leaves the message unchanged.
            logger.debug("Day switch to %s not applied: %s", slot, exc)

    async def show_categories(self, query) -> None:
        categories = self.catalog.categories()
        if not categories:
            await query.message.reply_text(NO_SYMBOLS_TEXT)
            return
        await query.message.reply_text("Dream Symbol Encyclopedia\nPick a category:", reply_markup=category_keyboard(categories))

    async def show_category(self, query, value: str) -> None:
        try:
            category = SymbolCategory(value)
        except ValueError:
            return
        symbols = self.catalog.by_category(category)
        if not symbols:
            await query.message.reply_text(f"No symbols in {category.label} yet.")
            return
        await query.message.reply_text(
            f"{category.icon} {category.label} ({len(symbols)})", reply_markup=symbol_list_keyboard(symbols)
        )

    async def show_symbol(self, query, symbol_id: str) -> None:
        symbol = self.catalog.get(symbol_id)
        if symbol is None:
            await query.message.reply_text("That symbol is no longer in the encyclopedia.")
            return
        await query.message.reply_text(
            format_symbol_card(None, None, symbol, detailed=True),
            reply_markup=reflect_keyboard(symbol),
        )

    async def reflect(self, query, value: str) -> None:
        symbol_id, _, raw_day = value.partition(":")
        symbol = self.catalog.get(symbol_id)
        if symbol is None:
            await query.message.reply_text("That symbol is no longer in the encyclopedia.")
            return
        day = parse_day_key(raw_day) or self.scheduler.today()
        await query.message.reply_text("Preparing a reflection...")
        text = self.llm.reflect_on_symbol(symbol, day)
        await query.message.reply_text(text)

    async def begin_entry(self, message, user_id: int) -> None:
        self.sessions[user_id] = {"mode": "entry", "q_index": 0, "data": {}}
        await message.reply_text("New dream entry. Send /cancel to stop.\n\n" + question_prompt(0))

    async def on_text(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        user = update.effective_user
        message = update.message
        if user is None or message is None:
            return
        self._register(update)

        session = self.sessions.get(user.id)
        if not session or session.get("mode") != "entry":
            await message.reply_text(
                "Use /menu to open options, or /entry to log a dream.",
                reply_markup=self.main_menu_keyboard(),
            )
            return

        idx = session.get("q_index", 0)
        key, _ = ENTRY_QUESTIONS[idx]
        try:
            session["data"][key] = parse_answer(key, message.text or "")
        except ValueError as exc:
            await message.reply_text(str(exc))
            return

        session["q_index"] = idx + 1
        if session["q_index"] >= len(ENTRY_QUESTIONS):
            await self.finish_entry(message, user.id)
            return
        await message.reply_text(question_prompt(session["q_index"]))

    async def finish_entry(self, message, user_id: int) -> None:
        session = self.sessions.pop(user_id, None)
        if not session:
            return
        today = self.scheduler.today()
        window = self.current_window()
        symbol = window.today if window is not None else None

        payload = dict(session["data"])
        payload["entry_date"] = day_key(today)
        payload["daily_symbol"] = symbol.id if symbol is not None else None
        payload["interpretation"] = self.llm.interpret_dream(payload, symbol)
        entry_id = self.db.save_entry(user_id, payload)
        before, after = self.db.record_journal_day(user_id, today)

        await message.reply_text(format_entry_summary(entry_id, payload), reply_markup=self.main_menu_keyboard())
        await message.reply_text(payload["interpretation"])

        current = after.active(today)
        streak_line = f"🔥 Streak: {current} day{'s' if current != 1 else ''}"
        milestone = reached_milestone(before, after)
        if milestone is not None:
            streak_line += "\n\n" + MILESTONE_INSIGHTS[milestone]
        await message.reply_text(streak_line)

    async def show_journal(self, message, user_id: int) -> None:
        entries = self.db.get_recent_entries(user_id, limit=12)
        if not entries:
            await message.reply_text("No entries yet. Start with /entry.")
            return
        await message.reply_text(format_entry_index(entries))

    async def show_streak(self, message, user_id: int) -> None:
        state = self.db.get_streak(user_id)
        await message.reply_text(format_streak(state, self.scheduler.today()))


def run() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)
    bot = DailySymbolBot(settings)
    app = bot.app()
    logger.info("Starting daily dream symbol bot")
    app.run_polling(close_loop=False)

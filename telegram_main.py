import logging

from dotenv import load_dotenv

from config import Settings, build_state
from infrastructure.logging_config import setup_logging
from interfaces.telegram.handlers import create_telegram_bot


load_dotenv()


def main() -> None:
    settings = Settings()
    setup_logging(settings.log_level, settings.log_file)

    if not settings.telegram_token:
        raise RuntimeError("TELEGRAM_TOKEN environment variable is not set.")

    state = build_state(settings)

    bot = create_telegram_bot(settings.telegram_token, state)
    logging.getLogger(__name__).info(
        "Starting Telegram bot with %s storage", settings.db_backend
    )
    bot.infinity_polling()


if __name__ == "__main__":
    main()

"""Точка входа в приложение."""
import logging

from catgallery.config import load_settings


def main() -> None:
    """Читает настройки, настраивает логирование и запускает главное окно."""
    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # UI toolkit imported lazily so settings errors surface before Tk starts
    from catgallery.app import CatGalleryApp

    app = CatGalleryApp(settings)
    app.mainloop()


if __name__ == "__main__":
    main()

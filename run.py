import logging

from smoothscroll.app import App
from smoothscroll.settings import DEFAULTS_PATH, load_settings

def main():
    cfg = load_settings(DEFAULTS_PATH)
    logging.basicConfig(
        level=getattr(logging, cfg.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = App(cfg, DEFAULTS_PATH)
    app.run()

if __name__ == "__main__":
    main()

"""Package entry point for ``python -m caption_cleaner``.

WHY: Users run the cleaner as ``python -m caption_cleaner captions.vtt``
for CLI mode, or ``python -m caption_cleaner --serve`` to start the HTTP API.

HOW: Checks sys.argv for the ``--serve`` flag. If present, starts the
FastAPI app under uvicorn. Otherwise, delegates to the CLI's main().
"""

import sys

if __name__ == "__main__":
    if "--serve" in sys.argv:
        from caption_cleaner.server.app import run_api
        run_api()
    else:
        from caption_cleaner.cli import main
        main()

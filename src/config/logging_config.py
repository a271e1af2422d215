import logging
import os
from pathlib import Path

def setup_logging(log_file: str = 'logs/app.log'):
    # Criar pasta de logs
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    # Configurar formato
    logging.basicConfig(
        level=getattr(logging, os.getenv('LOG_LEVEL', 'INFO').upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler()
        ]
    )

#!/usr/bin/env python3
"""
WSGI entry point para Gunicorn
Configura PYTHONPATH e inicia a aplicação
"""

import sys
import os
from pathlib import Path

# Configurar PYTHONPATH para importações corretas
current_dir = Path(__file__).parent  # /app/src
project_root = current_dir.parent    # /app

for path in (str(project_root), str(current_dir)):
    if path not in sys.path:
        sys.path.insert(0, path)

from config.logging_config import setup_logging
from app import create_app

setup_logging()

# Criar aplicação Flask
application = create_app()

# Alias para compatibilidade
app = application

if __name__ == "__main__":
    # Para teste local
    application.run(host='0.0.0.0', port=int(os.getenv('PORT', 5000)))

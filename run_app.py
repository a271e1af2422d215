#!/usr/bin/env python3
"""
Script de entrada para o backend Clara
Coloca src/ no PYTHONPATH e executa a aplicação Flask em modo desenvolvimento
"""

import sys
import traceback
from pathlib import Path

def main():
    """Executar a aplicação Clara"""

    project_root = Path(__file__).parent
    src_path = project_root / "src"

    for path in (str(project_root), str(src_path)):
        if path not in sys.path:
            sys.path.insert(0, path)

    print("🐍 PYTHONPATH configurado:")
    print(f"   📁 Projeto: {project_root}")
    print(f"   📁 Src: {src_path}")

    try:
        from app import main as app_main
        app_main()
    except KeyboardInterrupt:
        print("\n🛑 Aplicação interrompida pelo usuário")
        sys.exit(0)
    except Exception as e:
        print(f"❌ Erro ao iniciar aplicação: {e}")
        traceback.print_exc()
        sys.exit(1)

if __name__ == "__main__":
    main()

# Цей файл знаходиться в: inspector/config.py

import os

from dotenv import load_dotenv

load_dotenv()

PROJECT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# Файл специфікації за замовчуванням (шукається в SPEC_BASE_DIR)
DEFAULT_SPEC_FILE = os.getenv("INSPECTOR_SPEC_FILE", "petstore-expanded.json")
SPEC_BASE_DIR = os.getenv("INSPECTOR_BASE_DIR", PROJECT_DIR)
INDENT_WIDTH = int(os.getenv("INSPECTOR_INDENT_WIDTH", "2"))

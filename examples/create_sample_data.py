"""Crée un référentiel et un fichier d'import de démonstration pour ConcordAuto."""

import pandas as pd
from pathlib import Path

DATA_DIR = Path(__file__).parent / "data"
DATA_DIR.mkdir(exist_ok=True)

catalog = pd.DataFrame({
    "make": ["Honda", "Honda", "Honda", "Honda", "Toyota", "Toyota", "Mercedes-Benz"],
    "model": ["Accord", "Accord", "Civic", "CR-V", "Camry", "Corolla", "C-Class"],
    "variant": ["EX", "EX-L", "LX", "Touring", "LE", "XLE", "C 200"],
})

upload = pd.DataFrame({
    "vin": ["VIN0001", "VIN0002", "VIN0003", "VIN0004", "VIN0005"],
    "make": ["honda", "Hoda", "Toyota", "Mercedes Benz", "Tesla"],
    "model": ["Accrd", "Civic", "Corola", "C Class", "Model 3"],
    "variant": ["EX", "LX", "XLE", "C200", "Long Range"],
    "price": ["18500", "12900", "14200", "23900", "31000"],
})

catalog.to_excel(DATA_DIR / "catalog.xlsx", index=False, engine="openpyxl")
upload.to_excel(DATA_DIR / "upload.xlsx", index=False, engine="openpyxl")
print(f"Fichiers créés dans {DATA_DIR}")

"""Creates the empty products file under DATA_DIR."""
import pandas as pd

from catalog.config import settings
from catalog.database import db


COLUMNS = ['id', 'name', 'price', 'category', 'stock_quantity', 'description', 'image_url', 'created_at']

path = db.path_for('products')
if not path.exists():
    path.parent.mkdir(parents=True, exist_ok=True)
    df = pd.DataFrame(columns=COLUMNS)
    if path.suffix.lower() in ('.xls', '.xlsx'):
        df.to_excel(path, index=False)
    else:
        df.to_csv(path, index=False)
    print(f'Created {path} ({settings.ENV})')
else:
    print(f'{path} already exists')

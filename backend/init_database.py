# Create the extraction tables in the configured database
from sqlalchemy import inspect

from exam_extraction.config import config
from exam_extraction.models.db import init_database

engine = init_database(config.database_url)
print(f"Tables created: {', '.join(inspect(engine).get_table_names())}")

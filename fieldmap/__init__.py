"""Field mapper: connect source columns to target attributes by drag and drop."""

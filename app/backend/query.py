"""
Table Query Builder

Collects a table operation (select/insert/update/upsert/delete plus
filters, ordering and limits) and hands it to a backend for execution.
Both the REST client and the local backend execute the same builder.
"""


class TableQuery:
    """Chainable description of one operation on one table."""

    def __init__(self, executor, table):
        self._executor = executor
        self.table = table
        self.method = 'select'
        self.columns = '*'
        self.count = None
        self.head = False
        self.filters = []
        self.orders = []
        self.limit_count = None
        self.is_single = False
        self.payload = None

    def select(self, columns='*', count=None, head=False):
        self.method = 'select'
        self.columns = columns
        self.count = count
        self.head = head
        return self

    def insert(self, rows):
        self.method = 'insert'
        self.payload = rows
        return self

    def upsert(self, rows):
        self.method = 'upsert'
        self.payload = rows
        return self

    def update(self, values):
        self.method = 'update'
        self.payload = values
        return self

    def delete(self):
        self.method = 'delete'
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False, nulls_first=None):
        self.orders.append((column, desc, nulls_first))
        return self

    def limit(self, count):
        self.limit_count = count
        return self

    def single(self):
        self.is_single = True
        return self

    def execute(self):
        return self._executor.execute(self)

    def __repr__(self):
        return f'<TableQuery {self.method} {self.table} filters={self.filters}>'

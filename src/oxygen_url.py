import urllib.parse


class OxygenURL:
    """
    A request target on the Oxygen service.
    The query modifiers change this instance in place and return it so they can be chained.
    Each modifier only ever appears once in the query.
    """

    ID_QUERY = "id=true"
    OVERWRITE_QUERY = "overwrite=true"

    def __init__(self, scheme: str, host: str, path: str, raw_query: str = ""):
        self.scheme = scheme
        self.host = host
        self.path = path
        self.raw_query = raw_query

    @staticmethod
    def build(endpoint: str, template: str, *args) -> "OxygenURL":
        """Format the path with the arguments and put it under the endpoint. Nothing is validated here."""
        split = urllib.parse.urlsplit(endpoint)
        formatted = template % args
        base_path = split.path.rstrip("/")
        return OxygenURL(split.scheme, split.netloc, f"{base_path}/{formatted.lstrip('/')}")

    def set_id_query(self) -> "OxygenURL":
        """The trailing path segment is a node id rather than a name"""
        return self.add_string_to_query(OxygenURL.ID_QUERY)

    def set_overwrite_query(self) -> "OxygenURL":
        """Replace an existing node at the target instead of failing"""
        return self.add_string_to_query(OxygenURL.OVERWRITE_QUERY)

    def add_string_to_query(self, query: str) -> "OxygenURL":
        if not self.raw_query:
            self.raw_query = query
        elif query not in self.raw_query.split("&"):
            self.raw_query += "&" + query
        return self

    @property
    def quoted_path(self) -> str:
        return urllib.parse.quote(self.path, safe="/")

    def __str__(self) -> str:
        return urllib.parse.urlunsplit((self.scheme, self.host, self.quoted_path, self.raw_query, ""))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({str(self)!r})"

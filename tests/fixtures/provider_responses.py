# ABOUTME: Canned openBD and Google Books API response fixtures for testing.
# ABOUTME: Provides realistic JSON payloads matching each service's response shape.

OPENBD_RESPONSE = [
    {
        "onix": {"RecordReference": "9784061530194"},
        "hanmoto": {},
        "summary": {
            "isbn": "9784061530194",
            "title": "ドグラ・マグラ",
            "volume": "",
            "series": "",
            "publisher": "講談社",
            "pubdate": "1976",
            "cover": "http://cover.openbd.jp/9784061530194.jpg",
            "author": "夢野久作／著",
        },
    }
]

OPENBD_RESPONSE_MINIMAL = [{"summary": {"title": "T", "author": "A"}}]

OPENBD_RESPONSE_EMPTY = [None]

GOOGLE_RESPONSE = {
    "kind": "books#volumes",
    "totalItems": 1,
    "items": [
        {
            "id": "zyTCAlFPjgYC",
            "volumeInfo": {
                "title": "The Google Story",
                "authors": ["David A. Vise", "Mark Malseed"],
                "publisher": "Random House Digital, Inc.",
                "publishedDate": "2005-11-15",
                "imageLinks": {
                    "smallThumbnail": "http://books.google.com/books/content?id=zyTCAlFPjgYC&zoom=5",
                    "thumbnail": "http://books.google.com/books/content?id=zyTCAlFPjgYC&zoom=1",
                },
            },
        }
    ],
}

GOOGLE_RESPONSE_SPARSE = {
    "kind": "books#volumes",
    "totalItems": 1,
    "items": [{"id": "sparse", "volumeInfo": {"title": "Sparse Book"}}],
}

GOOGLE_RESPONSE_EMPTY = {"kind": "books#volumes", "totalItems": 0}

import logging
import os

from blobclient import Connection, ClientException
from sys import argv

logging.basicConfig(level=logging.ERROR)
logging.getLogger("requests").setLevel(logging.CRITICAL)
logging.getLogger("blobclient").setLevel(logging.CRITICAL)
logger = logging.getLogger(__name__)


def is_png(blob):
    return (
        blob.name.lower().endswith('.png') or
        blob.content_type == 'image/png'
    )


container = argv[1]
conn = Connection()
try:
    _headers, blobs = conn.list_blobs(container, prefix="archive_2016-01-01/",
                                      full_listing=True)
    for blob in blobs:
        if not is_png(blob):
            continue
        _headers, body = conn.get_blob(container, blob.name,
                                       resp_chunk_size=65536)
        path = os.path.join(container, blob.name)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, 'wb') as f:
            for chunk in body:
                f.write(chunk)
        print("'%s' downloaded" % blob.name)
except ClientException as e:
    logger.error(e)

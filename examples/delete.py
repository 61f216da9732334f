import logging

from blobclient import Connection, ClientException
from sys import argv

logging.basicConfig(level=logging.ERROR)
logging.getLogger("requests").setLevel(logging.CRITICAL)
logging.getLogger("blobclient").setLevel(logging.CRITICAL)
logger = logging.getLogger(__name__)

_min_size = 1024 * 1024
container = argv[1]
conn = Connection()
try:
    _headers, blobs = conn.list_blobs(container, full_listing=True)
    for blob in blobs:
        if blob.content_length < _min_size:
            conn.delete_blob(container, blob.name)
            print("Deleted %s" % blob.name)
except ClientException as e:
    logger.error(e)

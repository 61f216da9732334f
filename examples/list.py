import logging

from blobclient import Connection, ClientException
from sys import argv

logging.basicConfig(level=logging.ERROR)
logging.getLogger("requests").setLevel(logging.CRITICAL)
logging.getLogger("blobclient").setLevel(logging.CRITICAL)
logger = logging.getLogger(__name__)

container = argv[1]
minimum_size = 10*1024**2
conn = Connection()
try:
    _headers, blobs = conn.list_blobs(container, full_listing=True)
    for blob in blobs:
        if blob.content_length > minimum_size:
            print(
                "%s [size: %s] [etag: %s]" %
                (blob.name, blob.content_length, blob.etag)
            )

except ClientException as e:
    logger.error(e)

import logging

from os import walk
from os.path import join, relpath
from blobclient import Connection, ClientException
from sys import argv

logging.basicConfig(level=logging.ERROR)
logging.getLogger("requests").setLevel(logging.CRITICAL)
logging.getLogger("blobclient").setLevel(logging.CRITICAL)
logger = logging.getLogger(__name__)

dir = argv[1]
container = argv[2]
conn = Connection()
for (root, _dirs, files) in walk(dir):
    for name in files:
        path = join(root, name)
        blob_name = relpath(path, dir).replace('\\', '/')
        try:
            etag = conn.upload_file(container, path, blob_name=blob_name)
            print("%s [etag: %s]" % (blob_name, etag))
        except ClientException as e:
            logger.error("Failed to upload %s: %s", blob_name, e)

from treesync.core.models import ApplyOrder, HashAlgorithmName

HASH_ALIASES = {
    "md5": HashAlgorithmName.MD5,
    "crc32": HashAlgorithmName.CRC32,
    "xxh64": HashAlgorithmName.XXH64,
    "xxhash": HashAlgorithmName.XXH64,
}

HASH_CHOICES = list(HASH_ALIASES.keys())

HASH_HELP_TEXT = (
    "Content digest used to detect changed files:\n"
    "  md5        : MD5 (default)\n"
    "  crc32      : CRC-32 checksum\n"
    "  xxh64      : xxHash64, fastest (alias: xxhash)\n"
)

ORDER_ALIASES = {
    "delete-first": ApplyOrder.DELETE_FIRST,
    "copy-first": ApplyOrder.COPY_FIRST,
}

ORDER_CHOICES = list(ORDER_ALIASES.keys())

ORDER_HELP_TEXT = (
    "Which action list is applied first:\n"
    "  delete-first : remove destination-only entries, then copy (default)\n"
    "  copy-first   : copy, then remove the rest; entries whose type changed\n"
    "                 are still removed before their replacement is copied\n"
)

EPILOG_TEXT = """
Examples:
  Make ./dst an exact copy of ./src
  %(prog)s -s ./src -d ./dst

  Show what would change without touching the destination
  %(prog)s -s ~/photos -d /mnt/backup/photos --dry-run

  Write the copy and delete lists to files, using xxHash64 for comparison
  %(prog)s -s ~/photos -d /mnt/backup/photos --hash xxh64 -l --copy-file copy.txt --delete-file del.txt

  Move removed entries to the system trash instead of deleting them
  %(prog)s -s ~/photos -d /mnt/backup/photos --trash
"""

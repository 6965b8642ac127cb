#!/usr/bin/env python3
'''
Print the header and the list of chunks of a PNG file.

 $ convert -size 5x5 xc:red -size 5x5 xc:green -append red.png
 $ pnginfo.py red.png
'''
import logging
import os
import sys

from pngscan import PNGFile, PNGException


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)
logging.getLogger().setLevel(level=logging.INFO if 'DEBUG' not in os.environ else logging.DEBUG)


def usage(progname):
    print(f'usage: {progname} [--crc] <png file path>')
    sys.exit(1)


def dump_header(header):
    print(f'''IHDR:
  width:              {header.width}
  height:             {header.height}
  bit depth:          {header.bit_depth}
  color type:         {header.color_type.name} ({header.color_type.value})
  compression method: {header.compression_method.value}
  filter method:      {header.filter_method.value}
  interlace method:   {header.interlace_method.value}
''')


def dump_chunks(png):
    print(' [Nr] Type  Offset     Length     Flags')
    for idx, chunk in enumerate(png.chunks()):
        flags = ''.join((
            'C' if chunk.is_critical else 'a',
            'P' if chunk.is_public else 'p',
            'S' if chunk.is_safe_to_copy else '-',
        ))
        print(f' [{idx:02d}] {chunk.name:<5} 0x{chunk.offset:08x} {chunk.length:<10d} {flags}')


if __name__ == '__main__':
    args = sys.argv[1:]
    check_crc = '--crc' in args
    args = [_ for _ in args if _ != '--crc']

    if len(args) != 1:
        usage(sys.argv[0])

    filepath = args[0]

    try:
        with PNGFile(filepath, check_crc=check_crc) as png:
            dump_header(png.header)
            dump_chunks(png)
    except PNGException as e:
        logger.error(f'{filepath}: {e.__class__.__name__}: {e}')
        sys.exit(2)
    except OSError as e:
        logger.error(f'{filepath}: {e}')
        sys.exit(2)

#!/usr/bin/env python3
# Example usage of locked_file_handles: read a file under a shared lock,
# then write and append to another under an exclusive lock.

import sys

from rich.console import Console

from locked_file_handles import FileAppender, FileReader, FileWriter, OpenError

console = Console()

def main(read_path: str = "read_test_file.txt", write_path: str = "write_test_file.txt") -> None:
    reader = FileReader(read_path)
    try:
        reader.open()
    except OpenError as e:
        console.print(f"[red]{e}[/red]")
    else:
        try:
            # str(handle) shows the path, and while open the lock type and mode
            console.print(str(reader))
            for line in reader.iter_lines():
                console.print(line, highlight=False)
        finally:
            reader.close()

    with FileWriter(write_path) as writer:
        console.print(str(writer))
        writer.write_string("Testing here!\n")
        writer.write_string("More tests!\n")

    with FileAppender(write_path) as appender:
        console.print(str(appender))
        appender.write_string("Appending once!\n")
        appender.write_string("Appending twice!\n")

if __name__ == "__main__":
    main(*sys.argv[1:3])

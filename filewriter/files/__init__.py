from filewriter.files.file_writer import FileWriter

__all__ = ["FileWriter"]

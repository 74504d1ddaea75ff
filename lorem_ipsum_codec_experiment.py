from ahcodec.codecs import AdaptiveHuffmanCodec, CompressedData
from ahcodec.logger import Logger, CodingLog
from ahcodec.performance_display import PerformanceDisplay
from ahcodec.tree_validator import format_tree
from ahcodec.tree import AdaptiveHuffmanTree

lorem_ipsum_1par = "Lorem ipsum dolor sit amet, consectetur adipiscing elit. Donec a consectetur ligula. Nunc erat dolor, tristique sed sagittis quis, dignissim eget erat. Vivamus enim lorem, finibus sit amet maximus eget, condimentum sit amet massa. Fusce aliquet velit sit amet ex pretium, ut tincidunt dolor semper. Nulla pellentesque eget massa quis rhoncus. Curabitur maximus quis mauris vel sollicitudin. Integer tristique ut nisl sed consequat. Donec a ipsum ut sem cursus ullamcorper. Sed finibus, sapien id volutpat tempus, turpis odio placerat purus, sit amet scelerisque nibh sem a magna. Sed justo sem, facilisis at imperdiet eu, tincidunt vel quam. Ut id sollicitudin eros, sit amet bibendum tortor. Lorem ipsum dolor sit amet, consectetur adipiscing elit."

def main():
    print(lorem_ipsum_1par)

    lorem_ipsum_bytes = str.encode(lorem_ipsum_1par)
    print(f"Size of original data: {len(lorem_ipsum_bytes)}")

    codec = AdaptiveHuffmanCodec()
    logger = Logger()
    logger.display_info = False
    logger.display_progress = False
    compressed = codec.compress(lorem_ipsum_bytes, logger=logger)
    serialized = CompressedData.serialize(compressed)
    print(f"Size of compressed data: {len(serialized)}")
    print(codec.measure(lorem_ipsum_bytes, compressed))
    decompressed_data = codec.decompress(CompressedData.deserialize(serialized), logger=logger)
    print(f"Size of decompressed data: {len(decompressed_data)}")

    if lorem_ipsum_bytes == decompressed_data:
        print("Data integrity preserved.")
    else:
        print("Data integrity compromised.")

    tree = AdaptiveHuffmanTree()
    for symbol in b"lorem ipsum":
        if tree.contains(symbol):
            tree.bump(symbol)
        else:
            tree.insert(symbol)
    print(format_tree(tree))

    pm = PerformanceDisplay(logger.logs_of_type(CodingLog))
    pm.plot_code_length(show_graph=True)
    pm.plot_saved_bits(show_graph=True)

if __name__ == "__main__":
    main()

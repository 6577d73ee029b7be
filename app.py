import logging

import gradio as gr

from json_table_converter.config import get_config
from json_table_converter.handlers import (
    COLUMN_TABLE_HEADERS,
    COLUMN_TABLE_TYPES,
    add_custom_column_handler,
    apply_column_edits_handler,
    clear_handler,
    delete_column_handler,
    export_csv_handler,
    export_sql_handler,
    move_column_handler,
    toggle_custom_keys_handler,
    upload_handler,
)

config = get_config()
logging.basicConfig(level=config.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

# --- UI Definition ---
with gr.Blocks(title="JSON Table Converter") as demo:
    gr.Markdown("# JSON to CSV / SQL Converter")
    gr.Markdown("Upload one or more JSON arrays, choose and rename columns, then export CSV or SQL.")

    # State
    session_state = gr.State()

    with gr.Row():
        # Left Panel: Input & Columns
        with gr.Column(scale=1):
            gr.Markdown("### 1. Import")
            file_input = gr.File(label="Upload JSON File(s)", file_types=[".json"], file_count="multiple")
            status_msg = gr.Textbox(label="Status", interactive=False)

            gr.Markdown("### 2. Columns")
            use_custom_keys = gr.Checkbox(label="Use Custom Keys", value=False)
            column_table = gr.Dataframe(
                headers=COLUMN_TABLE_HEADERS,
                datatype=COLUMN_TABLE_TYPES,
                col_count=(len(COLUMN_TABLE_HEADERS), "fixed"),
                interactive=True,
                label="Select, Rename, and Type Columns",
            )
            with gr.Row():
                apply_btn = gr.Button("Apply Column Edits")
                add_custom_btn = gr.Button("Add Custom Column")
            with gr.Row():
                delete_index = gr.Number(label="Row to Delete", value=0, precision=0)
                delete_btn = gr.Button("Delete Row")
            with gr.Row():
                move_from = gr.Number(label="Move From", value=0, precision=0)
                move_to = gr.Number(label="Move To", value=0, precision=0)
                move_btn = gr.Button("Move Row")

        # Right Panel: Export
        with gr.Column(scale=1):
            gr.Markdown("### 3. Export CSV")
            csv_btn = gr.Button("Convert to CSV", variant="primary")

            gr.Markdown("### 4. Export SQL")
            table_name = gr.Textbox(label="Table Name", value=config.default_table_name)
            definition_only = gr.Checkbox(label="Table definition only (no INSERT statements)", value=False)
            sql_btn = gr.Button("Generate SQL", variant="primary")

            download_output = gr.File(label="Download Result")
            export_status = gr.Textbox(label="Export Status", interactive=False)
            clear_btn = gr.Button("Clear All", variant="stop")

    preview = gr.Dataframe(label="Preview", interactive=False)

    refresh_outputs = [session_state, status_msg, column_table, preview]

    file_input.upload(
        fn=upload_handler,
        inputs=[file_input, session_state],
        outputs=refresh_outputs,
    )

    use_custom_keys.change(
        fn=toggle_custom_keys_handler,
        inputs=[use_custom_keys, session_state],
        outputs=refresh_outputs,
    )

    apply_btn.click(
        fn=apply_column_edits_handler,
        inputs=[column_table, session_state],
        outputs=refresh_outputs,
    )

    add_custom_btn.click(
        fn=add_custom_column_handler,
        inputs=[session_state],
        outputs=refresh_outputs,
    )

    delete_btn.click(
        fn=delete_column_handler,
        inputs=[delete_index, session_state],
        outputs=refresh_outputs,
    )

    move_btn.click(
        fn=move_column_handler,
        inputs=[move_from, move_to, session_state],
        outputs=refresh_outputs,
    )

    csv_btn.click(
        fn=export_csv_handler,
        inputs=[session_state],
        outputs=[download_output, export_status],
    )

    sql_btn.click(
        fn=export_sql_handler,
        inputs=[table_name, definition_only, session_state],
        outputs=[download_output, export_status],
    )

    clear_btn.click(
        fn=clear_handler,
        inputs=[session_state],
        outputs=[*refresh_outputs, use_custom_keys],
    )

if __name__ == "__main__":
    demo.launch()

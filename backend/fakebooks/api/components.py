# Tailwind class strings shared by the form templates.

input_classes = "text-lg w-full rounded border border-gray-500 px-2 py-1"

submit_button_classes = (
    "w-full rounded bg-green-500 py-2 px-4 text-white hover:bg-green-600 focus:bg-green-400"
)

danger_button_classes = (
    "w-full rounded bg-red-600 py-2 px-4 text-white hover:bg-red-700 focus:bg-red-500"
)

line_item_classes = "flex justify-between border-t border-gray-100 py-4 text-[14px] leading-[24px]"

nav_link_classes = "block border-b border-gray-50 py-3 px-4 hover:bg-gray-50"

from tauri_launch.launch import main

main()
